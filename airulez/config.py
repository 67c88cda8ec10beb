"""Agentic AI Rulez configuration.

Centralised, typed configuration for detection and rule application.  All
settings use Pydantic v2 models so they can be validated at construction
time and serialised to/from JSON or environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from airulez.detector.models import CONCRETE_STACKS, StackId

_DEFAULT_STACKS_DIR = Path(__file__).parent / "stacks"


class ApplyOptions(BaseModel):
    """Switches for a single ``apply`` run.

    ``force`` is accepted for CLI compatibility but no write path consults
    it: config files are always write-if-absent and the guide file is always
    overwritten.
    """

    agents: bool = Field(default=False, description="Write .agents/ context files")
    git_hooks: bool = Field(default=False, description="Install a pre-commit hook")
    force: bool = Field(default=False, description="Overwrite existing files (unused)")
    force_stack: Optional[StackId] = Field(
        default=None, description="Stack to use regardless of detection"
    )
    non_interactive: bool = Field(default=False, description="Never prompt the operator")
    create_structure: bool = Field(
        default=False, description="Generate a skeleton layout even for non-empty projects"
    )

    @field_validator("force_stack")
    @classmethod
    def _force_stack_is_concrete(cls, value: Optional[StackId]) -> Optional[StackId]:
        if value is not None and value not in CONCRETE_STACKS:
            allowed = ", ".join(s.value for s in CONCRETE_STACKS)
            raise ValueError(f"force_stack must be one of: {allowed}")
        return value


class Config(BaseModel):
    """Global Agentic AI Rulez configuration.

    Holds the template bundle location, the names of generated files and the
    fallback project name.  Instances are created once by the CLI entry
    point and passed to the ``RuleApplier``.
    """

    stacks_dir: Path = Field(default=_DEFAULT_STACKS_DIR)
    guide_filename: str = Field(default="CLAUDE.md")
    guide_template: str = Field(default="CLAUDE.md.template")
    agents_dir: str = Field(default=".agents")
    default_project_name: str = Field(default="MyProject", min_length=1)
    config_files: list[str] = Field(
        default=[
            ".eslintrc.js",
            ".prettierrc",
            "pyproject.toml",
            ".editorconfig",
            "Directory.Build.props",
        ]
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def bundle_path(self, stack: StackId) -> Path:
        """Directory holding the template bundle for *stack*."""
        return self.stacks_dir / StackId(stack).value

    def guide_path(self, project_root: Path) -> Path:
        """Where the rendered guide file is written inside a project."""
        return project_root / self.guide_filename

    def agents_path(self, project_root: Path) -> Path:
        """The agent context directory inside a project."""
        return project_root / self.agents_dir

    @staticmethod
    def hooks_path(project_root: Path) -> Path:
        """The git hooks directory inside a project."""
        return project_root / ".git" / "hooks"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            AIRULEZ_STACKS_DIR, AIRULEZ_GUIDE_FILENAME,
            AIRULEZ_DEFAULT_PROJECT_NAME.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("AIRULEZ_STACKS_DIR"):
            kwargs["stacks_dir"] = Path(os.environ["AIRULEZ_STACKS_DIR"])
        if os.environ.get("AIRULEZ_GUIDE_FILENAME"):
            kwargs["guide_filename"] = os.environ["AIRULEZ_GUIDE_FILENAME"]
        if os.environ.get("AIRULEZ_DEFAULT_PROJECT_NAME"):
            kwargs["default_project_name"] = os.environ["AIRULEZ_DEFAULT_PROJECT_NAME"]
        return cls(**kwargs)
