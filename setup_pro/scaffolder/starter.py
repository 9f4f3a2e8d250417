"""Starter content and documentation for a freshly scaffolded project.

Writes the welcome page (root component), the Tailwind-enabled stylesheet,
the project README and the ``.env`` files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from setup_pro.errors import FilesystemFailure
from setup_pro.models import Framework, VariantConfig
from setup_pro.utils import first_existing

from .templates import TemplateRenderer

_PAGE_TEMPLATES: dict[Framework, str] = {
    Framework.REACT: "pages/react_app.j2",
    Framework.VUE: "pages/vue_app.j2",
    Framework.SVELTE: "pages/svelte_app.j2",
}

_DEFAULT_STYLESHEET = "src/index.css"

_ENV_FILES = (".env.example", ".env")


class StarterWriter:
    """Renders the files a user sees first in a new project."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def write_starter(
        self,
        variant_config: VariantConfig,
        project_root: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Overwrite the root component and the stylesheet.

        The stylesheet goes to the first existing candidate (the one the
        entry point already imports), else ``src/index.css``.

        Raises:
            FilesystemFailure: If either file cannot be written.
        """
        root = Path(project_root)
        page = root / variant_config.root_component
        stylesheet = first_existing(root, variant_config.stylesheet_candidates) or (
            root / _DEFAULT_STYLESHEET
        )
        template = _PAGE_TEMPLATES[variant_config.variant.framework]

        written: list[Path] = []
        for template_name, target in ((template, page), ("styles/index.css.j2", stylesheet)):
            try:
                written.append(await self.renderer.render_to_file(template_name, target, context))
            except OSError as exc:
                raise FilesystemFailure(f"Cannot write {target}: {exc}", path=target) from exc
        return written

    async def write_docs(self, project_root: Path, context: dict[str, Any]) -> list[Path]:
        """Write ``README.md`` and, when enabled, the ``.env`` files.

        The README replaces the generator's. Env files are only created when
        absent so local settings survive a re-run.
        """
        root = Path(project_root)
        written = [await self.renderer.render_to_file("docs/README.md.j2", root / "README.md", context)]

        if context.get("write_env_files", True):
            for name in _ENV_FILES:
                target = root / name
                if target.exists():
                    continue
                written.append(await self.renderer.render_to_file("docs/env.j2", target, context))
        return written
