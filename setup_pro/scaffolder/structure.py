"""Folder-structure materializer.

Creates the variant's folder layout under the project root and drops a short
``README.md`` into each folder describing what belongs there.  Purely
additive: existing directories and READMEs are left untouched.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import Optional

from setup_pro.errors import FilesystemFailure
from setup_pro.models import FolderSpec, VariantConfig

from .templates import TemplateRenderer


class StructureMaterializer:
    """Materializes the ``FolderSpec`` list of a variant."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def materialize(self, variant_config: VariantConfig, project_root: Path) -> list[Path]:
        """Ensure every declared folder exists.

        Returns:
            The declared directories in declaration order, including the ones
            that already existed.

        Raises:
            FilesystemFailure: If a directory or README cannot be written.
        """
        root = Path(project_root)
        created: list[Path] = []
        for folder in variant_config.folders:
            directory = root / folder.relative_path
            try:
                await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
                await self._write_folder_readme(folder, directory)
            except OSError as exc:
                raise FilesystemFailure(
                    f"Cannot create {folder.relative_path}: {exc}", path=directory
                ) from exc
            created.append(directory)
        return created

    async def _write_folder_readme(self, folder: FolderSpec, directory: Path) -> None:
        readme = directory / "README.md"
        if readme.exists():
            return
        await self.renderer.render_to_file(
            "docs/folder_README.md.j2",
            readme,
            {
                "name": PurePosixPath(folder.relative_path).name,
                "description": folder.description,
            },
        )
