"""Template rendering for generated project files.

Two kinds of templates are handled here:

* Jinja2 ``.j2`` templates shipped under ``airulez/scaffolder/templates/``
  (git hooks, agent context files, greenfield skeletons), rendered by
  :class:`TemplateRenderer`.
* Guide templates from a stack bundle, which recognise exactly one literal
  placeholder, ``{{PROJECT_NAME}}``, and are rendered by
  :func:`render_placeholder` without going through Jinja2.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

PROJECT_NAME_PLACEHOLDER = "{{PROJECT_NAME}}"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Jinja2 front end for the ``.j2`` files shipped with the package.

    Undefined variables raise instead of rendering as empty strings, so a
    template that expects ``project_name`` fails loudly when it is missing.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render *template_name* (relative to the template root) to a string."""
        return self.env.get_template(template_name).render(**context)

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_name* into *output_path*, replacing any existing file."""
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, self.render(template_name, context))
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render all templates below *template_prefix* into *output_dir*.

        Relative layout is kept and the ``.j2`` suffix dropped, so
        ``skeleton/python-fastapi/backend/app/main.py.j2`` with prefix
        ``skeleton/python-fastapi`` lands at ``<output_dir>/backend/app/main.py``.
        """
        written: list[Path] = []
        for name in self.list_templates(template_prefix):
            relative = name[len(template_prefix) + 1 : -len(".j2")]
            written.append(
                await self.render_to_file(name, Path(output_dir) / relative, context)
            )
        return written

    def list_templates(self, prefix: str = "") -> list[str]:
        """Sorted template names under *prefix*; empty if *prefix* is not a folder."""
        base = self.template_dir / prefix
        if not base.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix() for p in base.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Placeholder rendering
# ---------------------------------------------------------------------------


def render_placeholder(content: str, project_name: str) -> str:
    """Replace every ``{{PROJECT_NAME}}`` token in *content*.

    No other placeholder syntax is recognised; anything else that looks like
    a template tag is left untouched.
    """
    return content.replace(PROJECT_NAME_PLACEHOLDER, project_name)


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
