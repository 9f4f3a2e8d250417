"""Jinja2 template rendering for generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``setup_pro/scaffolder/templates/`` directory and renders them with
variant-specific context data: router setup files, starter pages,
stylesheets, READMEs and env files.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from setup_pro.config import Config
from setup_pro.models import Framework, VariantConfig
from setup_pro.utils import write_text


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders Jinja2 templates for generated project files.

    Templates are plain ``.j2`` files under a configurable directory.
    Undefined variables raise instead of rendering as empty strings, so a
    missing context key cannot silently produce a broken source file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["title_case"] = _title_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"router/react_router.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(write_text, out, content)
        return out


def build_context(
    variant_config: VariantConfig,
    project_name: str,
    config: Config | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the template context shared by every generated file."""
    config = config or Config()
    variant = variant_config.variant
    framework = variant.framework
    context: dict[str, Any] = {
        "project_name": project_name,
        "framework": framework.value,
        "display_name": variant_config.display_name,
        "is_ts": variant.is_typescript,
        "language_label": "TypeScript" if variant.is_typescript else "JavaScript",
        "ext": variant.file_extension,
        "entry_point": variant_config.entry_point,
        "root_component": variant_config.root_component,
        "router_package": variant_config.router_package,
        "docs_url": variant_config.docs_url,
        "folders": [
            {
                "name": PurePosixPath(folder.relative_path).name,
                "path": folder.relative_path,
                "description": folder.description,
            }
            for folder in variant_config.folders
        ],
        "code_lang": _CODE_LANGS[framework],
        "class_attr": "className" if framework is Framework.REACT else "class",
        "dev_command": config.run_script_command("dev"),
        "build_command": config.run_script_command("build"),
        "preview_command": config.run_script_command("preview"),
        "write_env_files": config.write_env_files,
        "tailwind_installed": False,
        "routing_wired": False,
    }
    context.update(extra)
    return context


_CODE_LANGS: dict[Framework, str] = {
    Framework.REACT: "jsx",
    Framework.VUE: "vue",
    Framework.SVELTE: "svelte",
}


def _title_case_filter(value: str) -> str:
    """Capitalise the first letter of each word: ``my-app`` -> ``My App``."""
    parts = re.split(r"[-_\s]+", value)
    return " ".join(word[:1].upper() + word[1:] for word in parts if word)
