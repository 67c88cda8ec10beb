"""Greenfield skeletons and per-stack directory setup.

Python FastAPI projects get real files rendered from
``templates/skeleton/python-fastapi``.  The .NET stacks delegate project
creation to the ``dotnet`` toolchain, so only the follow-up commands are
returned for the operator to run.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from airulez.detector.models import StackId
from airulez.detector.rules import solution_files
from airulez.utils import ensure_dir

from .templates import TemplateRenderer

PYTHON_BACKEND_DIRS: tuple[str, ...] = (
    "backend",
    "backend/app",
    "backend/app/api",
    "backend/app/models",
    "backend/app/services",
    "backend/tests",
)

DOTNET_COMMANDS: dict[StackId, tuple[str, ...]] = {
    StackId.DOTNET_BFF: (
        "dotnet new sln -n {name}",
        "dotnet new webapi -n {name}.BFF",
        "dotnet new webapi -n {name}.API",
        "dotnet new react -n {name}.Web",
        "dotnet sln add **/*.csproj",
    ),
    StackId.DOTNET_API: (
        "dotnet new sln -n {name}",
        "dotnet new webapi -n {name}.API",
        "dotnet new xunit -n {name}.Tests",
        "dotnet sln add **/*.csproj",
    ),
}


class StructureResult:
    """Outcome of a skeleton or setup step."""

    def __init__(self) -> None:
        self.files: list[Path] = []
        self.directories: list[Path] = []
        self.commands: list[str] = []
        self.solution: Path | None = None


class StructureGenerator:
    """Creates greenfield skeletons and stack-specific directories."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    # -- Greenfield skeleton -----------------------------------------------

    async def create_skeleton(
        self,
        project_root: Path,
        stack: StackId,
        context: dict[str, Any],
    ) -> StructureResult:
        """Generate the starter layout for *stack*.

        Only ``python-fastapi`` writes files; the .NET stacks return the
        ``dotnet new`` commands in ``result.commands`` instead.
        """
        result = StructureResult()
        if stack is StackId.PYTHON_FASTAPI:
            result.files = await self.renderer.render_tree(
                "skeleton/python-fastapi", project_root, context
            )
        elif stack in DOTNET_COMMANDS:
            name = context["project_name"]
            result.commands = [cmd.format(name=name) for cmd in DOTNET_COMMANDS[stack]]
        return result

    # -- Stack-specific setup ----------------------------------------------

    async def setup_stack(self, project_root: Path, stack: StackId) -> StructureResult:
        """Make sure the directories every project of *stack* needs exist."""
        result = StructureResult()
        if stack is StackId.PYTHON_FASTAPI:
            for rel in PYTHON_BACKEND_DIRS:
                path = project_root / rel
                if await asyncio.to_thread(ensure_dir, path):
                    result.directories.append(path)
        elif stack.family == "dotnet":
            solutions = solution_files(project_root)
            result.solution = solutions[0] if solutions else None
            tests_dir = project_root / "tests"
            if await asyncio.to_thread(ensure_dir, tests_dir):
                result.directories.append(tests_dir)
        return result
