"""setup-pro configuration.

Typed configuration for a scaffold run.  Settings are Pydantic v2 models so
they are validated at construction time and can be built from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class PackageManager(str, Enum):
    """Package managers that can install a Vite project."""
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


# How each package manager spells "add a dependency".
_ADD_VERBS: dict[PackageManager, str] = {
    PackageManager.NPM: "install",
    PackageManager.PNPM: "add",
    PackageManager.YARN: "add",
    PackageManager.BUN: "add",
}

_DEV_FLAGS: dict[PackageManager, str] = {
    PackageManager.NPM: "-D",
    PackageManager.PNPM: "-D",
    PackageManager.YARN: "-D",
    PackageManager.BUN: "-d",
}

DEFAULT_GENERATOR_COMMAND: list[str] = [
    "npm",
    "create",
    "vite@latest",
    "{project_name}",
    "--",
    "--template",
    "{template}",
]


class Config(BaseModel):
    """Global setup-pro configuration.

    Created once by the CLI entry point (or by tests) and passed to the
    pipeline, which hands the relevant parts to each component.
    """

    output_dir: Path = Field(default=Path("."), description="Parent directory of the new project")
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    generator_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GENERATOR_COMMAND),
        description="Generator command; {project_name} and {template} are substituted per token",
    )
    command_timeout: int = Field(
        default=900, ge=10, description="Per-command timeout for the generator and installer, in seconds"
    )
    write_env_files: bool = Field(default=True, description="Write .env and .env.example")

    # ------------------------------------------------------------------
    # Command builders
    # ------------------------------------------------------------------

    def generate_command(self, project_name: str, template: str) -> list[str]:
        """Return the generator invocation for *project_name* and *template*."""
        return [
            token.format(project_name=project_name, template=template)
            for token in self.generator_command
        ]

    def install_command(self) -> list[str]:
        """Return the command that installs ``package.json`` dependencies."""
        return [self.package_manager.value, "install"]

    def add_command(self, packages: list[str] | tuple[str, ...], dev: bool = False) -> list[str]:
        """Return the command that adds *packages* to the project."""
        cmd = [self.package_manager.value, _ADD_VERBS[self.package_manager]]
        if dev:
            cmd.append(_DEV_FLAGS[self.package_manager])
        cmd.extend(packages)
        return cmd

    def run_script_command(self, script: str) -> str:
        """Return the human-readable command for a ``package.json`` script."""
        if self.package_manager is PackageManager.NPM:
            return f"npm run {script}"
        return f"{self.package_manager.value} {script}"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SETUP_PRO_OUTPUT_DIR, SETUP_PRO_PACKAGE_MANAGER,
            SETUP_PRO_COMMAND_TIMEOUT, SETUP_PRO_WRITE_ENV.

        Keyword *overrides* (typically CLI flags) win over the environment;
        ``None`` values are ignored.

        Raises:
            ValidationError: If a variable holds an invalid value.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SETUP_PRO_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SETUP_PRO_OUTPUT_DIR"])
        if os.environ.get("SETUP_PRO_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["SETUP_PRO_PACKAGE_MANAGER"].strip().lower()
        if os.environ.get("SETUP_PRO_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = os.environ["SETUP_PRO_COMMAND_TIMEOUT"].strip()
        if os.environ.get("SETUP_PRO_WRITE_ENV"):
            kwargs["write_env_files"] = os.environ["SETUP_PRO_WRITE_ENV"].strip().lower() not in (
                "0",
                "false",
                "no",
            )

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
