"""Configuration injection engine.

Wires a capability (Tailwind CSS, a router) into files produced by the
external generator.  One injection is described by an
:class:`~setup_pro.models.InjectionPlan`:

1. install the plan's packages;
2. create its support files (only when absent);
3. apply its patch descriptors with the anchor-based patcher.

Patches are grouped by the file they resolve to and applied in memory in
declaration order.  A file is written once, and only when every patch on it
either applied or was already present, so a file never holds half of a
multi-patch change.

Injections are best-effort: a failed install, an unreadable file or a broken
support template is reported as ``PARTIALLY_SUCCEEDED`` instead of raised.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from jinja2 import TemplateError

from setup_pro.errors import ExternalGeneratorFailure
from setup_pro.models import (
    InjectionOutcome,
    InjectionPlan,
    InjectionReport,
    InjectionResult,
    PatchDescriptor,
    PatchReport,
    VariantConfig,
)
from setup_pro.scaffolder.templates import TemplateRenderer
from setup_pro.tooling import ExternalTools
from setup_pro.utils import first_existing, read_text, write_text

from .patcher import apply_patch


class InjectionEngine:
    """Applies styling and routing injection plans to a generated project."""

    def __init__(
        self,
        tools: ExternalTools,
        renderer: Optional[TemplateRenderer] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        self.tools = tools
        self.renderer = renderer or TemplateRenderer()
        self.context = context or {}

    # -- Public API --------------------------------------------------------

    async def inject_styling(
        self, variant_config: VariantConfig, project_root: Path
    ) -> InjectionReport:
        """Install Tailwind CSS and register its Vite plugin and stylesheet import."""
        return await self.inject(variant_config.styling, variant_config, project_root)

    async def inject_routing(
        self, variant_config: VariantConfig, project_root: Path
    ) -> InjectionReport:
        """Install the framework router, create its setup file, and render it from the entry point."""
        return await self.inject(variant_config.routing, variant_config, project_root)

    async def inject(
        self, plan: InjectionPlan, variant_config: VariantConfig, project_root: Path
    ) -> InjectionReport:
        """Run one injection plan against *project_root*."""
        report = InjectionReport(name=plan.name)
        root = Path(project_root)

        try:
            await self.tools.add_packages(root, plan.packages, dev=plan.dev)
        except (ExternalGeneratorFailure, OSError) as exc:
            # Wiring a package that is not installed would break the build.
            report.error = str(exc)
            return report
        report.packages_installed = True

        try:
            report.created_files = await self._create_support_files(plan, variant_config, root)
            report.patches = await asyncio.to_thread(patch_files, root, plan.patches)
        except (OSError, UnicodeDecodeError, TemplateError) as exc:
            report.error = f"{plan.name}: {exc}"
            return report

        primary = [p for p in report.patches if p.primary]
        if all(p.effective for p in primary):
            report.outcome = InjectionOutcome.SUCCEEDED
        return report

    # -- Internals ---------------------------------------------------------

    async def _create_support_files(
        self, plan: InjectionPlan, variant_config: VariantConfig, root: Path
    ) -> list[str]:
        context = {
            "is_ts": variant_config.variant.is_typescript,
            "ext": variant_config.variant.file_extension,
            **self.context,
        }
        created: list[str] = []
        for support in plan.support_files:
            target = root / support.relative_path
            if target.exists():
                continue
            await self.renderer.render_to_file(support.template, target, context)
            created.append(support.relative_path)
        return created


def patch_files(root: Path, descriptors: tuple[PatchDescriptor, ...] | list[PatchDescriptor]) -> list[PatchReport]:
    """Apply *descriptors* to the files under *root*.

    Returns one :class:`PatchReport` per descriptor, in declaration order.
    Raises ``OSError`` if a resolved file cannot be read or written, and
    ``UnicodeDecodeError`` if it is not UTF-8.
    """
    reports: list[Optional[PatchReport]] = [None] * len(descriptors)
    groups: dict[Path, list[int]] = {}

    for index, descriptor in enumerate(descriptors):
        path = first_existing(root, descriptor.target_file_candidates)
        if path is None:
            reports[index] = PatchReport(
                marker=descriptor.idempotence_marker,
                result=InjectionResult.FILE_NOT_FOUND,
                primary=descriptor.primary,
            )
            continue
        groups.setdefault(path, []).append(index)

    for path, indices in groups.items():
        original = read_text(path)
        text = original
        rel = path.relative_to(root).as_posix()
        for index in indices:
            descriptor = descriptors[index]
            text, result = apply_patch(text, descriptor)
            reports[index] = PatchReport(
                path=rel,
                marker=descriptor.idempotence_marker,
                result=result,
                primary=descriptor.primary,
            )

        group = [reports[i] for i in indices]
        if any(r.result is InjectionResult.ANCHOR_NOT_FOUND for r in group):
            for r in group:
                if r.result is InjectionResult.APPLIED:
                    r.discarded = True
            continue
        if text != original:
            write_text(path, text)

    return [r for r in reports if r is not None]
