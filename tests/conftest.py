"""Shared pytest fixtures for the setup-pro test suite.

Provides reusable fixtures for:
- Generated project trees shaped like the standard create-vite templates
- Mocked external tools (project generator and package manager)
- Mock subprocess helpers
- Default configuration pointing at a temporary directory
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from setup_pro.config import Config


# ---------------------------------------------------------------------------
# create-vite file shapes
# ---------------------------------------------------------------------------

VITE_CONFIGS: dict[str, str] = {
    "react": (
        "import { defineConfig } from 'vite'\n"
        "import react from '@vitejs/plugin-react'\n"
        "\n"
        "// https://vite.dev/config/\n"
        "export default defineConfig({\n"
        "  plugins: [react()],\n"
        "})\n"
    ),
    "vue": (
        "import { defineConfig } from 'vite'\n"
        "import vue from '@vitejs/plugin-vue'\n"
        "\n"
        "// https://vite.dev/config/\n"
        "export default defineConfig({\n"
        "  plugins: [vue()],\n"
        "})\n"
    ),
    "svelte": (
        "import { defineConfig } from 'vite'\n"
        "import { svelte } from '@sveltejs/vite-plugin-svelte'\n"
        "\n"
        "// https://vite.dev/config/\n"
        "export default defineConfig({\n"
        "  plugins: [svelte()],\n"
        "})\n"
    ),
}

REACT_MAIN_TSX = (
    "import { StrictMode } from 'react'\n"
    "import { createRoot } from 'react-dom/client'\n"
    "import './index.css'\n"
    "import App from './App.tsx'\n"
    "\n"
    "createRoot(document.getElementById('root')!).render(\n"
    "  <StrictMode>\n"
    "    <App />\n"
    "  </StrictMode>,\n"
    ")\n"
)

REACT_MAIN_JSX = (
    "import { StrictMode } from 'react'\n"
    "import { createRoot } from 'react-dom/client'\n"
    "import './index.css'\n"
    "import App from './App.jsx'\n"
    "\n"
    "createRoot(document.getElementById('root')).render(\n"
    "  <StrictMode>\n"
    "    <App />\n"
    "  </StrictMode>,\n"
    ")\n"
)

VUE_MAIN = (
    "import { createApp } from 'vue'\n"
    "import './style.css'\n"
    "import App from './App.vue'\n"
    "\n"
    "createApp(App).mount('#app')\n"
)

SVELTE_MAIN = (
    "import { mount } from 'svelte'\n"
    "import './app.css'\n"
    "import App from './App.svelte'\n"
    "\n"
    "const app = mount(App, {\n"
    "  target: document.getElementById('app'),\n"
    "})\n"
    "\n"
    "export default app\n"
)

_DEFAULT_CSS = ":root {\n  font-family: system-ui, Avenir, Helvetica, Arial, sans-serif;\n}\n"


def write_vite_project(root: Path, framework: str, language: str) -> Path:
    """Write a minimal create-vite project for *framework*/*language* into *root*."""
    ts = language == "ts"
    root.mkdir(parents=True, exist_ok=True)
    (root / "src").mkdir(exist_ok=True)
    (root / "package.json").write_text('{\n  "name": "%s"\n}\n' % root.name, encoding="utf-8")
    (root / f"vite.config.{'ts' if ts else 'js'}").write_text(VITE_CONFIGS[framework], encoding="utf-8")
    (root / "README.md").write_text("# React + TypeScript + Vite\n", encoding="utf-8")

    if framework == "react":
        ext = "tsx" if ts else "jsx"
        (root / "src" / f"main.{ext}").write_text(REACT_MAIN_TSX if ts else REACT_MAIN_JSX, encoding="utf-8")
        (root / "src" / f"App.{ext}").write_text("function App() { return null }\n", encoding="utf-8")
        (root / "src" / "index.css").write_text(_DEFAULT_CSS, encoding="utf-8")
    elif framework == "vue":
        (root / "src" / f"main.{language}").write_text(VUE_MAIN, encoding="utf-8")
        (root / "src" / "App.vue").write_text("<template><div /></template>\n", encoding="utf-8")
        (root / "src" / "style.css").write_text(_DEFAULT_CSS, encoding="utf-8")
    else:
        (root / "src" / f"main.{language}").write_text(SVELTE_MAIN, encoding="utf-8")
        (root / "src" / "App.svelte").write_text("<main></main>\n", encoding="utf-8")
        (root / "src" / "app.css").write_text(_DEFAULT_CSS, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Paths & projects
# ---------------------------------------------------------------------------

@pytest.fixture
def vite_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes a create-vite style project under ``tmp_path``.

    Usage:
        def test_something(vite_project):
            root = vite_project("vue", "ts")
    """
    def factory(framework: str = "react", language: str = "ts", name: str = "my-app") -> Path:
        return write_vite_project(tmp_path / name, framework, language)

    return factory


@pytest.fixture
def project_writer() -> Callable[[Path, str, str], Path]:
    """The raw ``write_vite_project`` helper, for custom generator side effects."""
    return write_vite_project


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config whose output directory is ``tmp_path``."""
    return Config(output_dir=tmp_path)


# ---------------------------------------------------------------------------
# Mocked external tools
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_tools() -> MagicMock:
    """ExternalTools stand-in whose generator writes a create-vite project.

    ``create_project`` produces ``<parent>/<name>`` with the file shapes of
    the requested template; ``install`` and ``add_packages`` succeed.
    """
    tools = MagicMock()

    async def create_project(project_name: str, template: str, parent_dir: Path) -> Path:
        framework, _, language = template.partition("-")
        return write_vite_project(Path(parent_dir) / project_name, framework, language or "js")

    tools.create_project = AsyncMock(side_effect=create_project)
    tools.install = AsyncMock(return_value=None)
    tools.add_packages = AsyncMock(return_value=None)
    return tools


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
