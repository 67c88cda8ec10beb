"""Agentic AI Rulez stack detector -- classifies a project directory.

Quick usage::

    from airulez.detector import StackDetector, StackId

    stack = StackDetector().detect(".")
    if stack is StackId.GREENFIELD:
        ...
"""

from airulez.detector.detector import StackDetector, is_greenfield, resolve_project_name
from airulez.detector.models import (
    CONCRETE_STACKS,
    STACK_LABELS,
    ProjectInfo,
    RuleReport,
    StackId,
)

__all__ = [
    "CONCRETE_STACKS",
    "STACK_LABELS",
    "ProjectInfo",
    "RuleReport",
    "StackDetector",
    "StackId",
    "is_greenfield",
    "resolve_project_name",
]
