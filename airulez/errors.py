"""Exceptions raised while resolving stacks and applying rules."""

from __future__ import annotations

from pathlib import Path


class RulesError(Exception):
    """Base class for errors that abort a rule application."""


class StackResolutionError(RulesError):
    """Raised when no concrete stack can be chosen for a project."""


class TemplateBundleNotFoundError(RulesError):
    """Raised when a stack has no template bundle in the distribution."""

    def __init__(self, stack: object, path: Path) -> None:
        self.stack = stack
        self.path = path
        stack_name = getattr(stack, "value", stack)
        super().__init__(f'Rules for stack "{stack_name}" not found at: {path}')
