"""Shared pytest fixtures for the Agentic AI Rulez test suite.

Provides reusable fixtures for:
- Fixture project trees for every supported stack
- Greenfield and unrecognised directories
- A git repository with a hooks directory
- A scripted stack chooser for the applier
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from airulez.config import Config
from airulez.detector import StackId


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create ``{relative_path: content}`` under *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
    return root


FASTAPI_MAIN = """\
    from fastapi import FastAPI

    app = FastAPI()
"""

DOTNET_PROGRAM = """\
    var builder = WebApplication.CreateBuilder(args);
    var app = builder.Build();
    app.Run();
"""


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------

@pytest.fixture
def greenfield_dir(tmp_path: Path) -> Path:
    """An empty project directory."""
    project_dir = tmp_path / "fresh-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def fastapi_project(tmp_path: Path) -> Path:
    """A Python FastAPI project with a React frontend."""
    project_dir = tmp_path / "fastapi-shop"
    project_dir.mkdir()
    write_files(project_dir, {
        "requirements.txt": "fastapi\nuvicorn\n",
        "main.py": FASTAPI_MAIN,
        "frontend/package.json": json.dumps({"name": "shop-ui"}),
    })
    yield project_dir


@pytest.fixture
def bff_project(tmp_path: Path) -> Path:
    """A .NET solution with a BFF project and a React client."""
    project_dir = tmp_path / "bff-portal"
    project_dir.mkdir()
    write_files(project_dir, {
        "Portal.sln": "Microsoft Visual Studio Solution File\n",
        "src/Portal.BFF/Portal.BFF.csproj": "<Project />\n",
        "src/Portal.API/Portal.API.csproj": "<Project />\n",
        "src/Portal.API/Program.cs": DOTNET_PROGRAM,
    })
    yield project_dir


@pytest.fixture
def api_project(tmp_path: Path) -> Path:
    """A plain ASP.NET Core Web API solution."""
    project_dir = tmp_path / "orders-api"
    project_dir.mkdir()
    write_files(project_dir, {
        "Orders.sln": "Microsoft Visual Studio Solution File\n",
        "Program.cs": "app.UseRouting();\n",
        "Orders.Api.csproj": "<Project />\n",
    })
    yield project_dir


@pytest.fixture
def unknown_project(tmp_path: Path) -> Path:
    """A directory with files that match no supported stack."""
    project_dir = tmp_path / "go-service"
    project_dir.mkdir()
    write_files(project_dir, {
        "go.mod": "module example.com/svc\n",
        "main.go": "package main\n",
        "Makefile": "all:\n",
    })
    yield project_dir


@pytest.fixture
def make_files():
    """Expose :func:`write_files` to tests that build ad-hoc trees."""
    return write_files


@pytest.fixture
def with_git_hooks():
    """Factory that adds a ``.git/hooks`` directory to a project."""
    def _add(project_dir: Path) -> Path:
        hooks = project_dir / ".git" / "hooks"
        hooks.mkdir(parents=True)
        return hooks
    return _add


# ---------------------------------------------------------------------------
# Applier collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration pointing at the bundled stacks."""
    return Config()


@pytest.fixture
def scripted_chooser():
    """A chooser that always answers with a fixed stack and records calls."""
    class _Chooser:
        def __init__(self, answer: StackId = StackId.PYTHON_FASTAPI) -> None:
            self.answer = answer
            self.calls: list[tuple[StackId, ...]] = []

        def __call__(self, choices):
            self.calls.append(tuple(choices))
            return self.answer

    return _Chooser()
