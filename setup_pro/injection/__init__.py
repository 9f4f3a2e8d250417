"""Configuration injection: anchor-based patching of generated files.

:func:`apply_patch` is the pure text patcher; :class:`InjectionEngine`
applies whole injection plans (packages, support files, patches) to a
project directory.
"""

from setup_pro.injection.engine import InjectionEngine, patch_files
from setup_pro.injection.patcher import apply_patch

__all__ = [
    "InjectionEngine",
    "apply_patch",
    "patch_files",
]
