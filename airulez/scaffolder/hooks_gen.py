"""Git pre-commit hook generation.

Renders one of two hook scripts, selected by stack family, into
``.git/hooks/pre-commit`` and marks it executable.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from airulez.config import Config
from airulez.detector.models import StackId
from airulez.utils import make_executable

from .templates import TemplateRenderer


class GitHookGenerator:
    """Installs the stack-specific pre-commit hook."""

    # Stack family -> hook template
    _HOOK_TEMPLATES: dict[str, str] = {
        "python": "hooks/pre-commit-python.sh.j2",
        "dotnet": "hooks/pre-commit-dotnet.sh.j2",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def template_for(self, stack: StackId) -> str:
        """Return the hook template name for *stack*.

        Raises:
            KeyError: If *stack* has no hook family.
        """
        return self._HOOK_TEMPLATES[StackId(stack).family]

    async def generate(
        self,
        project_root: Path,
        stack: StackId,
        context: dict[str, Any],
    ) -> Path | None:
        """Write ``pre-commit`` into the project's hooks directory.

        The hook is always overwritten.

        Returns:
            The hook path, or ``None`` when the project has no
            ``.git/hooks`` directory.
        """
        hooks_dir = Config.hooks_path(project_root)
        if not hooks_dir.is_dir():
            return None
        out = hooks_dir / "pre-commit"
        await self.renderer.render_to_file(self.template_for(stack), out, context)
        await asyncio.to_thread(make_executable, out)
        return out
