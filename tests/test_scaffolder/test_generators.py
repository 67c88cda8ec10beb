"""Tests for the git hook, agent context and structure generators.

Covers:
- Hook variant selection by stack family, permissions, overwrite, no .git
- Agent context files and the role hand-off chain
- Python FastAPI skeleton files and backend directories
- .NET follow-up commands and tests/ directory
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Any

import pytest

from airulez.detector import StackId
from airulez.scaffolder import (
    AGENT_ROLES,
    AgentContextGenerator,
    GitHookGenerator,
    StructureGenerator,
    TemplateRenderer,
)
from airulez.scaffolder.agents_gen import AGENT_HANDOFFS, handoff_for
from airulez.scaffolder.structure_gen import PYTHON_BACKEND_DIRS


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict[str, Any]:
    return {
        "project_name": "Acme",
        "stack": "python-fastapi",
        "stack_label": "Python FastAPI + React",
        "guide_filename": "CLAUDE.md",
    }


# ---------------------------------------------------------------------------
# GitHookGenerator
# ---------------------------------------------------------------------------


class TestGitHookGenerator:
    def test_template_selection(self, renderer):
        gen = GitHookGenerator(renderer)
        assert gen.template_for(StackId.PYTHON_FASTAPI) == "hooks/pre-commit-python.sh.j2"
        assert gen.template_for(StackId.DOTNET_BFF) == "hooks/pre-commit-dotnet.sh.j2"
        assert gen.template_for(StackId.DOTNET_API) == "hooks/pre-commit-dotnet.sh.j2"

    def test_no_template_for_greenfield(self, renderer):
        with pytest.raises(KeyError):
            GitHookGenerator(renderer).template_for(StackId.GREENFIELD)

    async def test_python_hook(self, renderer, context, tmp_path: Path, with_git_hooks):
        with_git_hooks(tmp_path)
        hook = await GitHookGenerator(renderer).generate(tmp_path, StackId.PYTHON_FASTAPI, context)
        assert hook == tmp_path / ".git" / "hooks" / "pre-commit"
        content = hook.read_text()
        assert "black . --check || exit 1" in content
        assert "python -m pytest || exit 1" in content
        assert "dotnet" not in content
        assert "Project: Acme" in content

    async def test_dotnet_hook(self, renderer, context, tmp_path: Path, with_git_hooks):
        with_git_hooks(tmp_path)
        hook = await GitHookGenerator(renderer).generate(tmp_path, StackId.DOTNET_API, context)
        content = hook.read_text()
        assert "dotnet format --verify-no-changes || exit 1" in content
        assert "dotnet test || exit 1" in content
        assert "pytest" not in content

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    async def test_hook_is_executable(self, renderer, context, tmp_path: Path, with_git_hooks):
        with_git_hooks(tmp_path)
        hook = await GitHookGenerator(renderer).generate(tmp_path, StackId.PYTHON_FASTAPI, context)
        assert stat.S_IMODE(hook.stat().st_mode) == 0o755

    async def test_hook_overwritten(self, renderer, context, tmp_path: Path, with_git_hooks):
        hooks = with_git_hooks(tmp_path)
        (hooks / "pre-commit").write_text("#!/bin/sh\nexit 0\n")
        await GitHookGenerator(renderer).generate(tmp_path, StackId.DOTNET_BFF, context)
        assert "dotnet build" in (hooks / "pre-commit").read_text()

    async def test_no_git_dir(self, renderer, context, tmp_path: Path):
        result = await GitHookGenerator(renderer).generate(tmp_path, StackId.PYTHON_FASTAPI, context)
        assert result is None
        assert not (tmp_path / ".git").exists()


# ---------------------------------------------------------------------------
# AgentContextGenerator
# ---------------------------------------------------------------------------


class TestAgentContextGenerator:
    async def test_writes_one_file_per_role(self, renderer, context, tmp_path: Path):
        agents_dir = tmp_path / ".agents"
        written = await AgentContextGenerator(renderer).generate(agents_dir, context)
        assert [p.name for p in written] == [
            "architect-context.md",
            "builder-context.md",
            "reviewer-context.md",
        ]

    async def test_content(self, renderer, context, tmp_path: Path):
        agents_dir = tmp_path / ".agents"
        await AgentContextGenerator(renderer).generate(agents_dir, context)
        builder = (agents_dir / "builder-context.md").read_text()
        assert builder.startswith("# BUILDER Agent Context")
        assert "## Project: Acme" in builder
        assert "- **Input from:** ARCHITECT agent (system design and specifications)" in builder
        assert "- **Output to:** REVIEWER agent" in builder
        assert "Copy the agent context from CLAUDE.md" in builder

    async def test_existing_dir_reused(self, renderer, context, tmp_path: Path):
        agents_dir = tmp_path / ".agents"
        agents_dir.mkdir()
        (agents_dir / "notes.md").write_text("keep me")
        await AgentContextGenerator(renderer).generate(agents_dir, context)
        assert (agents_dir / "notes.md").read_text() == "keep me"

    def test_handoff_chain(self):
        assert AGENT_ROLES == ("architect", "builder", "reviewer")
        assert set(AGENT_HANDOFFS) == set(AGENT_ROLES)
        assert handoff_for("architect")[1] == "BUILDER agent"
        assert handoff_for("reviewer")[1].startswith("Final implementation")

    def test_unknown_role_fallback(self):
        assert handoff_for("tester") == ("Previous agent in workflow", "Next agent in workflow")


# ---------------------------------------------------------------------------
# StructureGenerator
# ---------------------------------------------------------------------------


class TestStructureGenerator:
    async def test_python_skeleton(self, renderer, context, tmp_path: Path):
        result = await StructureGenerator(renderer).create_skeleton(
            tmp_path, StackId.PYTHON_FASTAPI, context
        )
        rel = sorted(p.relative_to(tmp_path).as_posix() for p in result.files)
        assert rel == [
            "backend/app/__init__.py",
            "backend/app/main.py",
            "backend/requirements.txt",
            "docker-compose.yml",
            "frontend/package.json",
        ]
        assert result.commands == []
        assert (tmp_path / "backend" / "app" / "__init__.py").read_text() == ""
        assert "POSTGRES_DB=acme" in (tmp_path / "docker-compose.yml").read_text()
        assert "# Acme backend" in (tmp_path / "backend" / "requirements.txt").read_text()

    async def test_dotnet_bff_commands(self, renderer, context, tmp_path: Path):
        result = await StructureGenerator(renderer).create_skeleton(
            tmp_path, StackId.DOTNET_BFF, context
        )
        assert result.files == []
        assert "dotnet new webapi -n Acme.BFF" in result.commands
        assert "dotnet new react -n Acme.Web" in result.commands
        assert list(tmp_path.iterdir()) == []

    async def test_dotnet_api_commands(self, renderer, context, tmp_path: Path):
        result = await StructureGenerator(renderer).create_skeleton(
            tmp_path, StackId.DOTNET_API, context
        )
        assert result.commands[0] == "dotnet new sln -n Acme"
        assert "dotnet new xunit -n Acme.Tests" in result.commands

    async def test_python_setup_creates_missing_dirs(self, renderer, tmp_path: Path):
        (tmp_path / "backend" / "app").mkdir(parents=True)
        result = await StructureGenerator(renderer).setup_stack(tmp_path, StackId.PYTHON_FASTAPI)
        for rel in PYTHON_BACKEND_DIRS:
            assert (tmp_path / rel).is_dir()
        created = {p.relative_to(tmp_path).as_posix() for p in result.directories}
        assert "backend" not in created
        assert "backend/app/api" in created

    async def test_dotnet_setup_reports_solution(self, renderer, tmp_path: Path):
        (tmp_path / "Shop.sln").write_text("")
        result = await StructureGenerator(renderer).setup_stack(tmp_path, StackId.DOTNET_API)
        assert result.solution == tmp_path / "Shop.sln"
        assert (tmp_path / "tests").is_dir()

    async def test_dotnet_setup_without_solution(self, renderer, tmp_path: Path):
        (tmp_path / "tests").mkdir()
        result = await StructureGenerator(renderer).setup_stack(tmp_path, StackId.DOTNET_BFF)
        assert result.solution is None
        assert result.directories == []
