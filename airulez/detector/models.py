"""Pydantic models and enums shared by the stack detector and the applier.

These types form the contract between detection and rule application:
``StackId`` names the classification, ``ProjectInfo`` carries what the
detector learned about a target directory.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class StackId(str, Enum):
    """Every classification the detector can produce."""

    PYTHON_FASTAPI = "python-fastapi"
    DOTNET_BFF = "dotnet-bff"
    DOTNET_API = "dotnet-api"
    GREENFIELD = "greenfield"
    NONE = "none"

    @property
    def is_concrete(self) -> bool:
        """``True`` for stacks that own a template bundle."""
        return self in CONCRETE_STACKS

    @property
    def family(self) -> str:
        """Stack family used to pick git hook variants: ``python`` or ``dotnet``."""
        if self is StackId.PYTHON_FASTAPI:
            return "python"
        if self in (StackId.DOTNET_BFF, StackId.DOTNET_API):
            return "dotnet"
        return ""

    @property
    def label(self) -> str:
        """Human-readable stack name."""
        return STACK_LABELS.get(self, self.value)


CONCRETE_STACKS: tuple[StackId, ...] = (
    StackId.PYTHON_FASTAPI,
    StackId.DOTNET_BFF,
    StackId.DOTNET_API,
)

STACK_LABELS: dict[StackId, str] = {
    StackId.PYTHON_FASTAPI: "Python FastAPI + React",
    StackId.DOTNET_BFF: ".NET BFF + React",
    StackId.DOTNET_API: ".NET Web API",
    StackId.GREENFIELD: "Greenfield (empty project)",
}


# ---------------------------------------------------------------------------
# Detection results
# ---------------------------------------------------------------------------


class ProjectInfo(BaseModel):
    """What the detector knows about a target project."""

    stack: StackId
    project_name: str = Field(..., min_length=1)
    project_path: Path = Field(..., description="Absolute path to the project root")

    def with_stack(self, stack: StackId) -> "ProjectInfo":
        """Return a copy with the stack replaced by an explicit choice."""
        return self.model_copy(update={"stack": stack})


class RuleReport(BaseModel):
    """Per-rule signal breakdown produced by ``StackDetector.explain``."""

    stack: StackId
    matched: bool
    signals: dict[str, bool] = Field(default_factory=dict)
