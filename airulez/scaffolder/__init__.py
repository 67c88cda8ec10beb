"""Agentic AI Rulez scaffolder -- writes rule files into a target project.

Quick usage::

    from airulez.scaffolder import TemplateBundle, TemplateRenderer

    bundle = TemplateBundle.locate(StackId.PYTHON_FASTAPI, Config())
    await bundle.render_guide(project_root, "my-project")
"""

from airulez.scaffolder.agents_gen import AGENT_ROLES, AgentContextGenerator
from airulez.scaffolder.bundle import TemplateBundle
from airulez.scaffolder.hooks_gen import GitHookGenerator
from airulez.scaffolder.structure_gen import StructureGenerator, StructureResult
from airulez.scaffolder.templates import TemplateRenderer, render_placeholder

__all__ = [
    "AGENT_ROLES",
    "AgentContextGenerator",
    "GitHookGenerator",
    "StructureGenerator",
    "StructureResult",
    "TemplateBundle",
    "TemplateRenderer",
    "render_placeholder",
]
