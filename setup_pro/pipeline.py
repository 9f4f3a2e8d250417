"""setup-pro scaffold orchestrator.

Runs the scaffold as a fixed sequence of stages:

1. generate   -- ``create vite`` the project skeleton            (fatal)
2. install    -- install base dependencies                      (fatal)
3. styling    -- install and wire Tailwind CSS v4               (warn)
4. routing    -- install and wire the framework router          (warn)
5. structure  -- create the folder layout                       (fatal)
6. starter    -- write the welcome page and stylesheet          (fatal)
7. docs       -- write README.md and .env files                 (warn)

A fatal stage stops the run and leaves the project as it is for the user to
inspect.  The project root is passed explicitly to every component; the
process working directory is never changed.

Usage::

    python -m setup_pro my-app --stack react-ts
    setup-pro my-app --framework vue --lang js --package-manager pnpm
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.panel import Panel
from rich.prompt import Prompt

from setup_pro.config import Config, PackageManager
from setup_pro.errors import ScaffoldError, UnknownVariant
from setup_pro.injection.engine import InjectionEngine
from setup_pro.models import (
    PROJECT_NAME_MAX_LENGTH,
    InjectionReport,
    ScaffoldRequest,
    ScaffoldResult,
)
from setup_pro.registry import lookup, parse_stack, supported_variants
from setup_pro.scaffolder.starter import StarterWriter
from setup_pro.scaffolder.structure import StructureMaterializer
from setup_pro.scaffolder.templates import TemplateRenderer, build_context
from setup_pro.tooling import ExternalTools
from setup_pro.utils import (
    ACCENT_COLOR,
    BRAND_COLOR,
    console,
    err_console,
    format_duration,
    print_stage_header,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

TROUBLESHOOTING_HINTS = (
    "Check your internet connection",
    "Node.js 18+ is required",
    "Try: npm cache clean --force",
    "Delete the partially generated project directory before retrying",
)


class ScaffoldPipeline:
    """Drives one scaffold run from an empty parent directory to a ready project.

    Attributes:
        config: Global configuration (output directory, package manager, ...).
        request: Validated project name and stack.
        variant_config: Registry entry for the requested stack.
        project_root: ``<output_dir>/<project_name>``.
        result: Accumulates stage results; returned by :meth:`run`.
    """

    # (key, method, running label, done label, fatal)
    _STAGES: list[tuple[str, str, str, str, bool]] = [
        ("generate", "stage_generate", "Creating {name} project", "{name} project created", True),
        ("install", "stage_install", "Installing base packages", "Base packages installed", True),
        ("styling", "stage_styling", "Adding Tailwind CSS v4", "Tailwind CSS v4 configured", False),
        ("routing", "stage_routing", "Installing {name} router", "{name} router installed & configured", False),
        ("structure", "stage_structure", "Creating folder structure", "Folder structure created", True),
        ("starter", "stage_starter", "Creating homepage", "Homepage created", True),
        ("docs", "stage_docs", "Writing documentation", "Documentation written", False),
    ]

    def __init__(
        self,
        config: Config,
        request: ScaffoldRequest,
        tools: Optional[ExternalTools] = None,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        # Unknown stacks fail here, before any process runs or file is written.
        self.variant_config = lookup(request.framework, request.language)
        self.config = config
        self.request = request
        self.tools = tools or ExternalTools(config)
        self.renderer = renderer or TemplateRenderer()
        self.context = build_context(self.variant_config, request.project_name, config)

        self.engine = InjectionEngine(self.tools, self.renderer, self.context)
        self.materializer = StructureMaterializer(self.renderer)
        self.starter = StarterWriter(self.renderer)

        self.project_root = Path(config.output_dir) / request.project_name
        self.result = ScaffoldResult(
            project_name=request.project_name,
            project_path=str(self.project_root),
        )

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    async def run(self) -> ScaffoldResult:
        """Execute every stage in order.

        Returns:
            The final :class:`ScaffoldResult`; ``success`` is False when a
            fatal stage failed.
        """
        started = time.monotonic()
        name = self.variant_config.display_name
        self._print_banner()

        for key, method_name, running, done, fatal in self._STAGES:
            method = getattr(self, method_name)
            try:
                with console.status(
                    f"[{ACCENT_COLOR}]{running.format(name=name)}...[/{ACCENT_COLOR}]",
                    spinner="dots",
                ):
                    warning = await method()
            except Exception as exc:
                if fatal:
                    self._fail(key, exc)
                    return self.result
                warning = f"{running.format(name=name)} failed: {exc}"

            self.result.stages_completed.append(key)
            if warning:
                self.result.warnings.append(warning)
                print_warning(f"  ! {warning}")
            else:
                print_success(f"  ✓ {done.format(name=name)}")

        self.result.success = True
        self._print_final_summary(time.monotonic() - started)
        return self.result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def stage_generate(self) -> Optional[str]:
        await self.tools.create_project(
            self.request.project_name,
            self.variant_config.variant.template_id,
            Path(self.config.output_dir),
        )
        return None

    async def stage_install(self) -> Optional[str]:
        await self.tools.install(self.project_root)
        return None

    async def stage_styling(self) -> Optional[str]:
        self.context["tailwind_installed"] = False
        report = await self.engine.inject_styling(self.variant_config, self.project_root)
        self.result.injections.append(report)
        self.context["tailwind_installed"] = report.packages_installed
        if report.succeeded:
            return None
        warning = f"Tailwind setup partial: {describe_report(report)}"
        if not report.packages_installed:
            warning += " (starter stylesheet written without the Tailwind import)"
        return warning

    async def stage_routing(self) -> Optional[str]:
        # Until the engine reports success the README describes manual setup.
        self.context["routing_wired"] = False
        report = await self.engine.inject_routing(self.variant_config, self.project_root)
        self.result.injections.append(report)
        self.context["routing_wired"] = report.succeeded
        if report.succeeded:
            return None
        return f"Router installed (manual setup needed): {describe_report(report)}"

    async def stage_structure(self) -> Optional[str]:
        await self.materializer.materialize(self.variant_config, self.project_root)
        return None

    async def stage_starter(self) -> Optional[str]:
        await self.starter.write_starter(self.variant_config, self.project_root, self.context)
        return None

    async def stage_docs(self) -> Optional[str]:
        await self.starter.write_docs(self.project_root, self.context)
        return None

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _fail(self, stage: str, exc: Exception) -> None:
        self.result.failed_stage = stage
        self.result.error = str(exc)

        lines = ["[bold red]✗ Setup Failed[/bold red]", "", f"[#94A3B8]{exc}[/#94A3B8]", ""]
        lines.append("[#F59E0B]Troubleshooting:[/#F59E0B]")
        lines.extend(f"[#94A3B8]  • {hint}[/#94A3B8]" for hint in TROUBLESHOOTING_HINTS)
        lines.append(f"[#94A3B8]  • Project left at {self.project_root}[/#94A3B8]")

        err_console.print()
        err_console.print(Panel("\n".join(lines), title=f"[bold]Stage: {stage}[/bold]", border_style="red"))
        if not isinstance(exc, (ScaffoldError, OSError)):
            err_console.print(f"[dim]{traceback.format_exc()}[/dim]")

    def _print_banner(self) -> None:
        variant = self.variant_config.variant
        console.print(
            Panel(
                f"[bold {BRAND_COLOR}]Everything configured. Just start coding.[/bold {BRAND_COLOR}]\n"
                f"Project : {self.request.project_name}\n"
                f"Stack   : {self.variant_config.display_name} + {self.context['language_label']}"
                f" ({variant.template_id})\n"
                f"Output  : {Path(self.config.output_dir).resolve()}",
                title="[bold]setup-pro[/bold]",
                border_style=BRAND_COLOR,
            )
        )
        console.print()

    def _print_final_summary(self, elapsed: float) -> None:
        print_stage_header("Project Ready")

        summary = {
            "Project": self.request.project_name,
            "Location": str(self.project_root),
            "Stack": f"{self.variant_config.display_name} + {self.context['language_label']}",
        }
        for report in self.result.injections:
            summary[report.name.capitalize()] = (
                "configured" if report.succeeded else "installed, manual setup needed"
            )
        summary["Duration"] = format_duration(elapsed)
        print_summary_table(summary, title="What's included")

        border = "green" if not self.result.warnings else "yellow"
        console.print(
            Panel(
                f"[{ACCENT_COLOR}]cd[/{ACCENT_COLOR}] {self.request.project_name}\n"
                f"[{ACCENT_COLOR}]{self.context['dev_command']}[/{ACCENT_COLOR}]",
                title="[bold]Start coding[/bold]",
                border_style=border,
            )
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def describe_report(report: InjectionReport) -> str:
    """One-line explanation of why an injection did not fully succeed."""
    if report.error:
        return report.error.splitlines()[0]
    problems = [
        f"{p.result.value.replace('_', ' ')} ({p.path or p.marker})"
        for p in report.patches
        if p.primary and not p.effective
    ]
    if not problems:
        discarded = [p.path for p in report.patches if p.discarded]
        return f"changes to {', '.join(sorted(set(discarded)))} discarded" if discarded else "unknown"
    return "; ".join(problems)


def _prompt_missing(
    project_name: Optional[str], stack: Optional[tuple[str, str]]
) -> tuple[str, tuple[str, str]]:
    """Ask for whatever the command line did not provide."""
    while not project_name:
        answer = Prompt.ask(f"[{BRAND_COLOR}]Project name[/{BRAND_COLOR}]", default="my-app")
        try:
            ScaffoldRequest(project_name=answer, framework="react")
        except ValidationError:
            err_console.print(
                "[red]Must start with a letter; only letters, numbers, dashes and "
                f"underscores; at most {PROJECT_NAME_MAX_LENGTH} characters[/red]"
            )
            continue
        project_name = answer

    if stack is None:
        choices = [f"{fw}-{lang}" for fw, lang in supported_variants()]
        answer = Prompt.ask(
            f"[{BRAND_COLOR}]Choose your stack[/{BRAND_COLOR}]", choices=choices, default=choices[0]
        )
        stack = parse_stack(answer)
    return project_name, stack


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``setup-pro`` / ``python -m setup_pro``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="setup-pro",
        description="Scaffold a Vite project with Tailwind CSS, a router and a clean folder layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  setup-pro my-app --stack react-ts\n"
            "  setup-pro my-app --framework vue --lang js\n"
            "  setup-pro my-app --stack svelte --package-manager pnpm -o ./projects\n"
        ),
    )
    parser.add_argument("project_name", nargs="?", default=None, help="Name of the new project")
    parser.add_argument(
        "--stack",
        default=None,
        help="Framework and language, e.g. react-ts, vue-js, svelte (TypeScript by default)",
    )
    parser.add_argument("--framework", default=None, help="react, vue or svelte")
    parser.add_argument("--lang", default=None, help="js or ts (default: ts)")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory in which the project folder is created (default: current directory)",
    )
    parser.add_argument(
        "--package-manager",
        default=None,
        choices=[pm.value for pm in PackageManager],
        help="Package manager used to install dependencies (default: npm)",
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Do not write .env / .env.example",
    )

    args = parser.parse_args(argv)

    stack: Optional[tuple[str, str]] = None
    if args.stack:
        stack = parse_stack(args.stack)
    elif args.framework:
        stack = (args.framework, args.lang or "ts")

    project_name = args.project_name
    if project_name is None or stack is None:
        if not sys.stdin.isatty():
            print_error(
                "Error: project name and --stack (or --framework) "
                "are required when not running interactively"
            )
            sys.exit(1)
        project_name, stack = _prompt_missing(project_name, stack)

    try:
        request = ScaffoldRequest(project_name=project_name, framework=stack[0], language=stack[1])
    except ValidationError:
        print_error(
            f"Error: Invalid project name {project_name!r}: must start with a "
            "letter and contain only letters, numbers, dashes and underscores "
            f"(at most {PROJECT_NAME_MAX_LENGTH} characters)"
        )
        sys.exit(1)

    try:
        config = Config.from_env(
            output_dir=Path(args.output) if args.output else None,
            package_manager=args.package_manager,
            write_env_files=False if args.no_env else None,
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        print_error(f"Error: Invalid configuration ({fields}); check the SETUP_PRO_* environment variables")
        sys.exit(1)

    try:
        pipeline = ScaffoldPipeline(config, request)
    except UnknownVariant as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    result = asyncio.run(pipeline.run())
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
