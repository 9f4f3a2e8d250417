"""setup-pro -- scaffold a Vite project that is configured from the first run.

Quick usage::

    import asyncio

    from setup_pro import Config, ScaffoldPipeline, ScaffoldRequest

    request = ScaffoldRequest(project_name="my-app", framework="react", language="ts")
    pipeline = ScaffoldPipeline(Config(output_dir="./projects"), request)
    result = asyncio.run(pipeline.run())
"""

from setup_pro.config import Config, PackageManager
from setup_pro.errors import (
    ExternalGeneratorFailure,
    FilesystemFailure,
    ScaffoldError,
    UnknownVariant,
)
from setup_pro.models import ScaffoldRequest, ScaffoldResult
from setup_pro.pipeline import ScaffoldPipeline
from setup_pro.registry import lookup, supported_variants

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ExternalGeneratorFailure",
    "FilesystemFailure",
    "PackageManager",
    "ScaffoldError",
    "ScaffoldPipeline",
    "ScaffoldRequest",
    "ScaffoldResult",
    "UnknownVariant",
    "lookup",
    "supported_variants",
]
