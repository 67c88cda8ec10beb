"""Command-line interface for Agentic AI Rulez.

Usage::

    airulez init --path ./my-project --agents --git-hooks
    airulez init --stack python-fastapi --yes
    airulez detect --path ./my-project --verbose
    airulez info
    airulez validate --path ./my-project
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.table import Table

from airulez import __version__
from airulez.applier import RuleApplier
from airulez.config import ApplyOptions, Config
from airulez.detector import CONCRETE_STACKS, StackDetector, StackId
from airulez.scaffolder import AGENT_ROLES
from airulez.utils import (
    confirm,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

_AGENT_DESCRIPTIONS: dict[str, str] = {
    "architect": "System design & architecture",
    "builder": "Feature implementation",
    "reviewer": "Code quality & security",
}

_STACK_DETAILS: dict[str, tuple[str, ...]] = {
    "python-fastapi": (
        "FastAPI backend with async support",
        "React frontend with TypeScript",
        "SQLAlchemy ORM + PostgreSQL",
        "pytest + React Testing Library",
    ),
    "dotnet-bff": (
        ".NET 8+ Backend For Frontend pattern",
        "React frontend with TypeScript",
        "Entity Framework Core + SQL Server",
        "xUnit + React Testing Library",
    ),
    "dotnet-api": (
        "Pure .NET Web API projects",
        "Clean Architecture pattern",
        "Entity Framework Core",
        "xUnit testing framework",
    ),
}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace) -> int:
    """Detect the project, confirm with the operator, and apply rules."""
    root = Path(args.path)
    if not root.is_dir():
        print_error(f"Error: project path is not a directory: {root}")
        return 1

    console.print("[yellow]Detecting project structure...[/yellow]\n")
    config = Config.from_env()
    info = StackDetector().get_project_info(root)

    if info is None and not args.stack:
        print_error("No supported project stack detected.")
        _print_supported_stacks()
        return 1

    if info is not None:
        print_summary_table(
            {"Stack": info.stack.value, "Project": info.project_name, "Path": str(info.project_path)},
            title="Detected project",
        )
    project_name = info.project_name if info is not None else config.default_project_name

    agents = args.agents
    git_hooks = args.git_hooks
    if not args.yes:
        if not confirm(f"Apply AgenticAIRulez to {project_name}?", default=True):
            print_warning("Setup cancelled.")
            return 0
        agents = confirm("Enable multi-agent setup (Architect/Builder/Reviewer)?", default=agents)
        git_hooks = confirm("Setup automated git hooks for quality checks?", default=git_hooks)

    options = ApplyOptions(
        agents=agents,
        git_hooks=git_hooks,
        force=args.force,
        force_stack=args.stack,
        non_interactive=args.non_interactive or args.yes,
        create_structure=args.create_structure,
    )
    success = asyncio.run(RuleApplier(config).apply(root, options))

    if not success:
        print_error("\nSetup failed.")
        return 1
    print_success("\nSetup complete!")
    return 0


def cmd_detect(args: argparse.Namespace) -> int:
    """Detect the project stack without applying rules."""
    root = Path(args.path)
    if not root.is_dir():
        print_error(f"Error: project path is not a directory: {root}")
        return 1

    console.print("[yellow]Detecting project structure...[/yellow]\n")
    detector = StackDetector()
    info = detector.get_project_info(root)

    if args.verbose:
        _print_rule_signals(detector, root)

    if info is None:
        print_error("No supported project stack detected.")
        _print_supported_stacks()
        return 1

    print_success("Project detected:")
    print_summary_table(
        {"Name": info.project_name, "Stack": info.stack.value, "Path": str(info.project_path)},
        title="Project Information",
    )
    if info.stack is StackId.GREENFIELD:
        console.print(
            "Use --stack to choose one of: "
            + ", ".join(s.value for s in CONCRETE_STACKS)
        )
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Print the supported stacks and agent roles."""
    console.print("[bold blue]Supported Technology Stacks:[/bold blue]\n")
    for stack in CONCRETE_STACKS:
        console.print(f"[bold green]{stack.label}[/bold green] [dim]({stack.value})[/dim]")
        for detail in _STACK_DETAILS[stack.value]:
            console.print(f"   [dim]- {detail}[/dim]")
        console.print()

    console.print("[bold blue]Multi-Agent Support:[/bold blue]")
    for role in AGENT_ROLES:
        console.print(f"   [dim]- {role.capitalize()}: {_AGENT_DESCRIPTIONS[role]}[/dim]")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Check that a project carries the generated rule files."""
    console.print("[yellow]Validating AgenticAIRulez setup...[/yellow]\n")
    config = Config.from_env()
    root = Path(args.path).resolve()

    checks = [
        (f"{config.guide_filename} file", config.guide_path(root), True),
        ("Agent contexts directory", config.agents_path(root), False),
        ("Git hooks", Config.hooks_path(root) / "pre-commit", False),
    ]

    passed = 0
    failed = 0
    for name, path, required in checks:
        if path.exists():
            console.print(f"[green]+ {name}[/green]")
            passed += 1
        elif required:
            console.print(f"[red]x {name} (required)[/red]")
            failed += 1
        else:
            console.print(f"[yellow]! {name} (optional)[/yellow]")

    console.print()
    if failed:
        print_error(f"Validation failed: {failed} required checks failed")
        console.print('[dim]Run "airulez init" to fix setup issues.[/dim]')
        return 1
    print_success(f"Validation passed: {passed} checks successful")
    return 0


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _print_supported_stacks() -> None:
    console.print("[dim]Supported stacks:[/dim]")
    for stack in CONCRETE_STACKS:
        console.print(f"[dim]  - {stack.label}[/dim]")
    console.print("[dim]For greenfield projects, use --stack to specify the stack type.[/dim]")


def _print_rule_signals(detector: StackDetector, root: Path) -> None:
    table = Table(title="Detection signals", show_header=True, header_style="bold cyan")
    table.add_column("Stack", no_wrap=True)
    table.add_column("Signal", style="dim")
    table.add_column("Value")
    table.add_column("Gating")

    for rule, report in zip(detector.rules, detector.explain(root)):
        for signal, value in report.signals.items():
            table.add_row(
                report.stack.value,
                signal,
                "[green]yes[/green]" if value else "[red]no[/red]",
                "required" if signal in rule.required else "",
            )
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``airulez`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="airulez",
        description="AI Coding Standards & Rules for Enterprise Teams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  airulez init\n"
            "  airulez init --path ./my-project --agents --git-hooks\n"
            "  airulez init --stack python-fastapi --yes\n"
            "  airulez detect --verbose\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    stack_values = [s.value for s in CONCRETE_STACKS]

    init = sub.add_parser("init", help="Initialize AI coding rules in a project")
    init.add_argument("--path", "-p", default=".", help="Project path (default: .)")
    init.add_argument(
        "--stack",
        choices=stack_values,
        default=None,
        help="Force a specific stack",
    )
    init.add_argument("--agents", action="store_true", help="Enable multi-agent setup")
    init.add_argument("--git-hooks", action="store_true", help="Set up git hooks")
    init.add_argument("--force", action="store_true", help="Overwrite existing files")
    init.add_argument("--yes", "-y", action="store_true", help="Skip confirmations")
    init.add_argument(
        "--non-interactive",
        action="store_true",
        help="Disable interactive prompts (CI mode)",
    )
    init.add_argument(
        "--create-structure",
        action="store_true",
        help="Generate the starter project layout even if the directory is not empty",
    )
    init.set_defaults(func=cmd_init)

    detect = sub.add_parser("detect", help="Detect the project stack without applying rules")
    detect.add_argument("--path", "-p", default=".", help="Project path (default: .)")
    detect.add_argument(
        "--verbose", "-v", action="store_true", help="Show every detection signal"
    )
    detect.set_defaults(func=cmd_detect)

    info = sub.add_parser("info", help="Show information about supported stacks")
    info.set_defaults(func=cmd_info)

    validate = sub.add_parser("validate", help="Validate an existing AgenticAIRulez setup")
    validate.add_argument("--path", "-p", default=".", help="Project path (default: .)")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``airulez`` and ``python -m airulez``."""
    args = build_parser().parse_args(argv)
    code = args.func(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
