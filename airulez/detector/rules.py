"""Detection rules, one predicate object per supported stack.

Each rule inspects a project root and answers a single yes/no question.
Rules never write to disk and never raise for missing or unreadable files:
anything that cannot be read is treated as absent.  Every call re-scans the
filesystem; nothing is cached between rules.
"""

from __future__ import annotations

from pathlib import Path

from .models import StackId


# ---------------------------------------------------------------------------
# Filesystem probes
# ---------------------------------------------------------------------------


def visible_entries(root: Path) -> list[str]:
    """Return the names of directory entries that do not start with a dot."""
    return [name.name for name in root.iterdir() if not name.name.startswith(".")]


def has_file_containing(
    root: Path, file_names: list[str], search_terms: list[str]
) -> bool:
    """Return ``True`` if any of *file_names* under *root* contains any term.

    Files are read whole and searched with a plain substring test.
    """
    for file_name in file_names:
        file_path = root / file_name
        if not file_path.is_file():
            continue
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        if any(term in content for term in search_terms):
            return True
    return False


def has_folder_matching(root: Path, pattern: str) -> bool:
    """Return ``True`` if a directory matching the glob *pattern* exists.

    Glob errors (permission problems, broken links) count as "no match".
    """
    try:
        return any(p.is_dir() for p in root.glob(pattern))
    except (OSError, ValueError):
        return False


def solution_files(root: Path) -> list[Path]:
    """Return the ``*.sln`` files at the project root, sorted by name."""
    try:
        return sorted(p for p in root.glob("*.sln") if p.is_file())
    except OSError:
        return []


def count_files(root: Path, pattern: str) -> int:
    try:
        return sum(1 for p in root.glob(pattern) if p.is_file())
    except OSError:
        return 0


def has_bff_folder(root: Path) -> bool:
    """A folder literally named ``BFF`` or ending in ``.BFF`` anywhere below *root*."""
    return has_folder_matching(root, "**/BFF") or has_folder_matching(root, "**/*.BFF")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class StackRule:
    """Base class for a single-stack detection predicate.

    Subclasses implement :meth:`signals`, which computes every named check
    for the stack, and list the signal names that gate the match in
    ``required``.  Signals not listed in ``required`` are informational.
    """

    stack: StackId = StackId.NONE
    required: tuple[str, ...] = ()

    def signals(self, root: Path) -> dict[str, bool]:
        raise NotImplementedError

    def matches(self, root: Path) -> bool:
        """Return ``True`` when every required signal holds for *root*."""
        computed = self.signals(root)
        return all(computed[name] for name in self.required)


class PythonFastAPIRule(StackRule):
    """Python backend with FastAPI, optionally with a React frontend."""

    stack = StackId.PYTHON_FASTAPI
    required = ("python_project", "fastapi_app")

    def signals(self, root: Path) -> dict[str, bool]:
        return {
            "python_project": (
                (root / "requirements.txt").exists()
                or (root / "pyproject.toml").exists()
            ),
            "fastapi_app": has_file_containing(
                root, ["main.py", "app.py"], ["fastapi", "FastAPI"]
            ),
            "react_frontend": (
                (root / "frontend" / "package.json").exists()
                or (root / "client" / "package.json").exists()
                or (root / "package.json").exists()
            ),
        }


class DotNetBFFRule(StackRule):
    """.NET solution with a Backend-For-Frontend project."""

    stack = StackId.DOTNET_BFF
    required = ("solution", "bff_folder")

    def signals(self, root: Path) -> dict[str, bool]:
        return {
            "solution": bool(solution_files(root)),
            "bff_folder": has_bff_folder(root),
            "react_frontend": has_file_containing(
                root, ["package.json"], ["react", "React"]
            ),
            "multiple_projects": count_files(root, "**/*.csproj") >= 2,
        }


class DotNetAPIRule(StackRule):
    """Plain ASP.NET Core Web API without a BFF layer."""

    stack = StackId.DOTNET_API
    required = ("solution", "web_host", "no_bff_folder")

    def signals(self, root: Path) -> dict[str, bool]:
        return {
            "solution": bool(solution_files(root)),
            "web_host": has_file_containing(
                root, ["Program.cs", "Startup.cs"], ["WebApplication", "UseRouting"]
            ),
            "no_bff_folder": not has_bff_folder(root),
        }


# Priority order: the first rule that matches wins.
DEFAULT_RULES: tuple[StackRule, ...] = (
    PythonFastAPIRule(),
    DotNetBFFRule(),
    DotNetAPIRule(),
)
