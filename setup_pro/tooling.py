"""External tools: the project generator and the package manager.

Both are driven through :func:`setup_pro.utils.run_command`.  A non-zero
exit (or a timeout) is raised as
:class:`~setup_pro.errors.ExternalGeneratorFailure` carrying the command and
its stderr, so callers decide whether the failure is fatal.
"""

from __future__ import annotations

from pathlib import Path

from .config import Config
from .errors import ExternalGeneratorFailure
from .utils import run_command


class ExternalTools:
    """Thin async wrapper around ``create vite`` and the package manager."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def _run(self, cmd: list[str], cwd: Path, what: str) -> str:
        cmd_str = " ".join(cmd)
        try:
            returncode, stdout, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.config.command_timeout
            )
        except FileNotFoundError as exc:
            raise ExternalGeneratorFailure(
                f"{what} failed: '{cmd[0]}' is not installed or not on PATH",
                command=cmd_str,
            ) from exc

        if returncode != 0:
            detail = stderr or stdout
            raise ExternalGeneratorFailure(
                f"{what} failed (exit {returncode}): {cmd_str}" + (f"\n{detail}" if detail else ""),
                command=cmd_str,
                returncode=returncode,
                stderr=stderr,
            )
        return stdout

    async def create_project(self, project_name: str, template: str, parent_dir: Path) -> Path:
        """Run the project generator inside *parent_dir*.

        Returns:
            Path of the generated ``<parent_dir>/<project_name>`` directory.

        Raises:
            ExternalGeneratorFailure: If the generator exits non-zero or
                does not produce the project directory.
        """
        parent_dir.mkdir(parents=True, exist_ok=True)
        cmd = self.config.generate_command(project_name, template)
        await self._run(cmd, parent_dir, "Project generator")

        project_root = parent_dir / project_name
        if not project_root.is_dir():
            raise ExternalGeneratorFailure(
                f"Project generator did not create {project_root}",
                command=" ".join(cmd),
            )
        return project_root

    async def install(self, project_root: Path) -> None:
        """Install the dependencies declared in ``package.json``."""
        await self._run(self.config.install_command(), project_root, "Dependency install")

    async def add_packages(
        self, project_root: Path, packages: list[str] | tuple[str, ...], dev: bool = False
    ) -> None:
        """Add *packages* to the project (as dev dependencies when *dev*)."""
        if not packages:
            return
        await self._run(
            self.config.add_command(packages, dev=dev),
            project_root,
            f"Installing {', '.join(packages)}",
        )
