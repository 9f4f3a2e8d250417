"""Tests for TemplateRenderer and the shared template context."""

from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from setup_pro.config import Config, PackageManager
from setup_pro.registry import lookup
from setup_pro.scaffolder.templates import TemplateRenderer, build_context

pytestmark = pytest.mark.unit


class TestTemplateRenderer:
    def test_missing_variable_raises(self):
        with pytest.raises(UndefinedError):
            TemplateRenderer().render("docs/folder_README.md.j2", {"name": "utils"})

    def test_title_case_filter(self):
        text = TemplateRenderer().render(
            "docs/folder_README.md.j2", {"name": "my_shared-utils", "description": "x"}
        )
        assert text.startswith("# My Shared Utils\n")

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "hello.j2").write_text("Hello {{ who }}!", encoding="utf-8")

        assert TemplateRenderer(tmp_path).render("hello.j2", {"who": "Vite"}) == "Hello Vite!"

    @pytest.mark.asyncio
    async def test_render_to_file_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "README.md"

        out = await TemplateRenderer().render_to_file(
            "docs/folder_README.md.j2", target, {"name": "lib", "description": "Library code"}
        )

        assert out == target
        assert target.read_text(encoding="utf-8") == "# Lib\n\nLibrary code\n"

    @pytest.mark.parametrize("framework,language", [("vue", "js"), ("svelte", "ts")])
    def test_every_template_renders(self, framework, language):
        renderer = TemplateRenderer()
        context = build_context(lookup(framework, language), "demo", name="demo", description="d")

        root = renderer.template_dir
        templates = sorted(p.relative_to(root).as_posix() for p in root.rglob("*.j2"))
        assert "router/svelte_router.j2" in templates
        for template in templates:
            assert renderer.render(template, context)


class TestBuildContext:
    def test_react_ts(self):
        context = build_context(lookup("react", "ts"), "my-app")

        assert context["project_name"] == "my-app"
        assert context["is_ts"] is True
        assert context["ext"] == "tsx"
        assert context["language_label"] == "TypeScript"
        assert context["class_attr"] == "className"
        assert context["root_component"] == "src/App.tsx"
        assert context["dev_command"] == "npm run dev"
        assert context["routing_wired"] is False
        assert context["tailwind_installed"] is False
        assert [f["name"] for f in context["folders"]] == [
            "components", "pages", "hooks", "utils", "assets", "services", "router",
        ]

    def test_package_manager_commands(self):
        config = Config(package_manager=PackageManager.PNPM)
        context = build_context(lookup("svelte", "js"), "app", config)

        assert context["dev_command"] == "pnpm dev"
        assert context["class_attr"] == "class"
        assert context["is_ts"] is False

    def test_extra_keys_override(self):
        context = build_context(lookup("vue", "ts"), "app", routing_wired=True)
        assert context["routing_wired"] is True

    def test_readme_mentions_manual_router_setup(self):
        context = build_context(lookup("vue", "ts"), "app", routing_wired=False)
        readme = TemplateRenderer().render("docs/README.md.j2", context)
        assert "could not be wired automatically" in readme
        assert "src/main.ts" in readme
