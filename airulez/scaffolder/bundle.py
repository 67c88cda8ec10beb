"""Stack template bundles: the guide template plus static config files.

A bundle is a read-only directory ``<stacks_dir>/<stack-id>/`` shipped with
the package.  The guide template is rendered into the target project on
every run; config files are copied only when the project does not already
have them.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from airulez.config import Config
from airulez.detector.models import StackId
from airulez.errors import TemplateBundleNotFoundError

from .templates import render_placeholder


class TemplateBundle:
    """The template bundle for one concrete stack."""

    def __init__(self, stack: StackId, path: Path, config: Config) -> None:
        self.stack = stack
        self.path = path
        self.config = config

    @classmethod
    def locate(cls, stack: StackId, config: Config) -> "TemplateBundle":
        """Find the bundle for *stack*.

        Raises:
            TemplateBundleNotFoundError: If the bundle directory is missing.
        """
        path = config.bundle_path(stack)
        if not path.is_dir():
            raise TemplateBundleNotFoundError(stack, path)
        return cls(stack, path, config)

    @property
    def guide_template(self) -> Path:
        return self.path / self.config.guide_template

    async def render_guide(self, project_root: Path, project_name: str) -> Path | None:
        """Render the guide template into *project_root*, overwriting any copy.

        Returns:
            The written path, or ``None`` if the bundle has no guide template.
        """
        if not self.guide_template.is_file():
            return None
        template = await asyncio.to_thread(self.guide_template.read_text, encoding="utf-8")
        target = self.config.guide_path(project_root)
        await asyncio.to_thread(
            target.write_text, render_placeholder(template, project_name), encoding="utf-8"
        )
        return target

    async def copy_configs(self, project_root: Path) -> list[Path]:
        """Copy bundled config files that the project does not have yet.

        Existing files in the project are never overwritten.

        Returns:
            The destination paths that were created.
        """
        created: list[Path] = []
        for name in self.config.config_files:
            source = self.path / name
            target = project_root / name
            if source.is_file() and not target.exists():
                await asyncio.to_thread(shutil.copyfile, source, target)
                created.append(target)
        return created
