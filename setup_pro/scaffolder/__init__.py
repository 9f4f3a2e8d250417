"""Generated-file writers: folder layout, starter page, docs, templates."""

from setup_pro.scaffolder.starter import StarterWriter
from setup_pro.scaffolder.structure import StructureMaterializer
from setup_pro.scaffolder.templates import TemplateRenderer, build_context

__all__ = [
    "StarterWriter",
    "StructureMaterializer",
    "TemplateRenderer",
    "build_context",
]
