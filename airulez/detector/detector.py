"""Stack detection for target project directories.

Classifies a directory as one of the supported stacks, as a greenfield
(empty or near-empty) project, or as unrecognised.  Detection is strictly
read-only.

Quick usage::

    from airulez.detector import StackDetector

    info = StackDetector().get_project_info("./my-project")
    if info is not None:
        print(info.stack, info.project_name)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from .models import ProjectInfo, RuleReport, StackId
from .rules import DEFAULT_RULES, StackRule, solution_files, visible_entries


class StackDetector:
    """Runs the ordered detection rules against a project root.

    Args:
        rules: Detection rules in priority order.  Defaults to the built-in
            Python FastAPI, .NET BFF and .NET API rules.
    """

    def __init__(self, rules: Sequence[StackRule] | None = None) -> None:
        self.rules: tuple[StackRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    # -- Classification ----------------------------------------------------

    def detect(self, path: str | Path) -> StackId:
        """Classify the directory at *path*.

        Raises:
            NotADirectoryError: If *path* is not an existing directory.
        """
        root = _as_directory(path)
        if is_greenfield(root):
            return StackId.GREENFIELD
        for rule in self.rules:
            if rule.matches(root):
                return rule.stack
        return StackId.NONE

    def get_project_info(self, path: str | Path) -> ProjectInfo | None:
        """Detect the stack and derive the project name.

        Returns ``None`` when no stack is recognised.  Greenfield directories
        still produce a ``ProjectInfo`` so the caller can pick a stack.
        """
        stack = self.detect(path)
        if stack is StackId.NONE:
            return None
        root = Path(path).resolve()
        return ProjectInfo(
            stack=stack,
            project_name=resolve_project_name(root),
            project_path=root,
        )

    def explain(self, path: str | Path) -> list[RuleReport]:
        """Return every rule's computed signals for *path*, in priority order."""
        root = _as_directory(path)
        reports: list[RuleReport] = []
        for rule in self.rules:
            signals = rule.signals(root)
            reports.append(
                RuleReport(
                    stack=rule.stack,
                    matched=all(signals[name] for name in rule.required),
                    signals=signals,
                )
            )
        return reports


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def is_greenfield(path: str | Path) -> bool:
    """Return ``True`` for an empty or near-empty directory.

    Dotfiles are ignored.  A directory holding at most two visible entries,
    one of which is ``README.md``, still counts as greenfield.
    """
    entries = visible_entries(Path(path))
    return len(entries) == 0 or (len(entries) <= 2 and "README.md" in entries)


def resolve_project_name(root: Path) -> str:
    """Pick the best project name available under *root*.

    Precedence: ``name`` in a parseable ``package.json``, then the stem of
    the first ``*.sln`` file, then the directory's own name.
    """
    package_name = _package_json_name(root / "package.json")
    if package_name:
        return package_name
    solutions = solution_files(root)
    if solutions:
        return solutions[0].stem
    return root.resolve().name


def _package_json_name(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    name = data.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def _as_directory(path: str | Path) -> Path:
    root = Path(path)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    return root
