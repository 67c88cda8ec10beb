"""Agentic AI Rulez: AI coding rules for FastAPI and .NET projects.

Detects a project's technology stack and writes the matching assistant
guide, config files, git hooks and agent context files into it.
"""

__version__ = "1.0.0"
