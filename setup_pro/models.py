"""Data model for setup-pro.

Registry data (variants, folder specs, patch descriptors, injection plans)
is immutable and expressed as frozen dataclasses.  Anything produced at run
time and shown to the user (injection reports, the scaffold result) is a
Pydantic v2 model so it can be validated and dumped to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


PROJECT_NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_-]*$"
PROJECT_NAME_MAX_LENGTH = 50


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Supported frontend frameworks."""
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"


class Language(str, Enum):
    """Supported language flavours."""
    JS = "js"
    TS = "ts"


class InsertionRule(str, Enum):
    """Where a patch payload goes inside the target text."""
    AFTER_LAST_IMPORT = "after_last_import"
    AFTER_FIRST_PATTERN = "after_first_pattern"
    APPEND_AT_TOP = "append_at_top"
    REPLACE_FIRST_PATTERN = "replace_first_pattern"


class InjectionResult(str, Enum):
    """Outcome of applying one patch descriptor."""
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    ANCHOR_NOT_FOUND = "anchor_not_found"
    FILE_NOT_FOUND = "file_not_found"


class InjectionOutcome(str, Enum):
    """Aggregated outcome of one injection (styling or routing)."""
    SUCCEEDED = "succeeded"
    PARTIALLY_SUCCEEDED = "partially_succeeded"


# ---------------------------------------------------------------------------
# Registry records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Variant:
    """One buildable (framework, language) combination."""

    framework: Framework
    language: Language
    template_id: str
    file_extension: str

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TS


@dataclass(frozen=True)
class FolderSpec:
    """A folder to create under ``src/`` and what it is for."""

    relative_path: str
    description: str


@dataclass(frozen=True)
class PatchDescriptor:
    """One atomic text injection.

    ``pattern`` is a regular expression and is required for the two
    pattern-based rules.  ``primary`` descriptors decide whether the
    injection as a whole succeeded.
    """

    target_file_candidates: tuple[str, ...]
    idempotence_marker: str
    rule: InsertionRule
    payload: str
    pattern: Optional[str] = None
    primary: bool = True


@dataclass(frozen=True)
class SupportFile:
    """A new file an injection creates from a template, if absent."""

    relative_path: str
    template: str


@dataclass(frozen=True)
class InjectionPlan:
    """Everything needed to wire one capability into a project."""

    name: str
    packages: tuple[str, ...]
    dev: bool = False
    support_files: tuple[SupportFile, ...] = ()
    patches: tuple[PatchDescriptor, ...] = ()


@dataclass(frozen=True)
class VariantConfig:
    """Registry entry for a variant: all data the pipeline needs."""

    variant: Variant
    display_name: str
    router_package: str
    folders: tuple[FolderSpec, ...]
    styling: InjectionPlan
    routing: InjectionPlan
    entry_point: str
    root_component: str
    stylesheet_candidates: tuple[str, ...]
    docs_url: str


# ---------------------------------------------------------------------------
# Run-time reports
# ---------------------------------------------------------------------------

class ScaffoldRequest(BaseModel):
    """Validated user input: what to scaffold."""

    project_name: str = Field(
        ...,
        pattern=PROJECT_NAME_PATTERN,
        max_length=PROJECT_NAME_MAX_LENGTH,
        description="Directory and package name of the new project",
    )
    framework: str = Field(..., description="react, vue or svelte")
    language: str = Field(default="ts", description="js or ts")


class PatchReport(BaseModel):
    """What happened to one patch descriptor."""

    path: Optional[str] = Field(default=None, description="Resolved target file, relative to the project")
    marker: str = Field(..., description="Idempotence marker of the descriptor")
    result: InjectionResult
    primary: bool = Field(default=True)
    discarded: bool = Field(
        default=False,
        description="Applied in memory but not written because another patch on the same file failed",
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective(self) -> bool:
        """True when the file on disk now carries this patch."""
        if self.result is InjectionResult.ALREADY_APPLIED:
            return True
        return self.result is InjectionResult.APPLIED and not self.discarded


class InjectionReport(BaseModel):
    """Aggregated result of one ``inject_*`` call."""

    name: str
    outcome: InjectionOutcome = InjectionOutcome.PARTIALLY_SUCCEEDED
    packages_installed: bool = False
    created_files: list[str] = Field(default_factory=list)
    patches: list[PatchReport] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Install or I/O error, if any")

    @computed_field  # type: ignore[misc]
    @property
    def succeeded(self) -> bool:
        return self.outcome is InjectionOutcome.SUCCEEDED


class ScaffoldResult(BaseModel):
    """Final state of a scaffold run."""

    project_name: str
    project_path: str = ""
    stages_completed: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    injections: list[InjectionReport] = Field(default_factory=list)
    success: bool = False
    failed_stage: Optional[str] = None
    error: Optional[str] = None
