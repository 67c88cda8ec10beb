"""Agent context files for the architect -> builder -> reviewer workflow."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer

AGENT_ROLES: tuple[str, ...] = ("architect", "builder", "reviewer")

# role -> (input from, output to)
AGENT_HANDOFFS: dict[str, tuple[str, str]] = {
    "architect": (
        "Business requirements and project specifications",
        "BUILDER agent",
    ),
    "builder": (
        "ARCHITECT agent (system design and specifications)",
        "REVIEWER agent",
    ),
    "reviewer": (
        "BUILDER agent (implemented code and features)",
        "Final implementation (or back to BUILDER for changes)",
    ),
}


def handoff_for(role: str) -> tuple[str, str]:
    """Return ``(input_from, output_to)`` for *role*."""
    return AGENT_HANDOFFS.get(role, ("Previous agent in workflow", "Next agent in workflow"))


class AgentContextGenerator:
    """Writes one ``<role>-context.md`` file per agent role."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(
        self,
        agents_dir: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every agent context file into *agents_dir*.

        Args:
            agents_dir: Target directory, created if missing.
            context: Template context; must include ``project_name``.

        Returns:
            Written file paths, in role order.
        """
        written: list[Path] = []
        for role in AGENT_ROLES:
            input_from, output_to = handoff_for(role)
            role_ctx = {
                **context,
                "role": role,
                "input_from": input_from,
                "output_to": output_to,
            }
            path = await self.renderer.render_to_file(
                "agents/context.md.j2", agents_dir / f"{role}-context.md", role_ctx
            )
            written.append(path)
        return written
