"""Rule application pipeline.

Resolves the stack for a target project, then writes the stack's rules into
it in a fixed order:

1. Guide file rendered from the bundle (always overwritten).
2. Static config files (written only when absent).
3. Git pre-commit hook (optional).
4. Agent context files (optional).
5. Greenfield skeleton (optional, or automatic for empty projects).
6. Stack-specific directories.

Usage::

    applier = RuleApplier(Config())
    ok = asyncio.run(applier.apply("./my-project", ApplyOptions(agents=True)))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence

from airulez.config import ApplyOptions, Config
from airulez.detector import CONCRETE_STACKS, ProjectInfo, StackDetector, StackId, is_greenfield
from airulez.errors import RulesError, StackResolutionError
from airulez.scaffolder import (
    AgentContextGenerator,
    GitHookGenerator,
    StructureGenerator,
    TemplateBundle,
    TemplateRenderer,
)
from airulez.utils import (
    console,
    print_error,
    print_header,
    print_step,
    print_success,
    print_warning,
    prompt_stack,
)

StackChooser = Callable[[Sequence[StackId]], StackId]


class RuleApplier:
    """Applies a stack's rule bundle to a project directory.

    Attributes:
        config: Tool configuration (bundle location, file names).
        detector: Stack detector used to classify the target.
        chooser: Called with the concrete stacks when a greenfield project
            needs an interactive choice.  Defaults to a Rich prompt.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        detector: StackDetector | None = None,
        chooser: StackChooser | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.detector = detector or StackDetector()
        self.chooser: StackChooser = chooser or prompt_stack
        self.renderer = renderer or TemplateRenderer()
        self.hooks_gen = GitHookGenerator(self.renderer)
        self.agents_gen = AgentContextGenerator(self.renderer)
        self.structure_gen = StructureGenerator(self.renderer)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def apply(self, path: str | Path, options: ApplyOptions | None = None) -> bool:
        """Detect, resolve and apply rules to the project at *path*.

        Returns:
            ``True`` on success.  Failures are reported on the console and
            returned as ``False``; files written before a failure are kept.
        """
        options = options or ApplyOptions()
        print_header("Applying AgenticAIRulez")

        info = self.resolve_project(path, options)
        if info is None:
            return False

        try:
            bundle = TemplateBundle.locate(info.stack, self.config)
        except RulesError as exc:
            print_error(str(exc))
            return False

        console.print(f"  Project: {info.project_name}")
        console.print(f"  Stack:   {info.stack.value}")
        console.print(f"  Path:    {info.project_path}\n")

        success = await self.apply_stack_rules(info, bundle, options)
        if success:
            self._print_next_steps(options)
        return success

    def resolve_project(self, path: str | Path, options: ApplyOptions) -> ProjectInfo | None:
        """Work out which concrete stack to apply.

        Returns ``None`` (after reporting why) when no stack can be chosen.
        """
        try:
            return self._resolve_project(path, options)
        except (StackResolutionError, NotADirectoryError) as exc:
            print_error(str(exc))
            return None

    async def apply_stack_rules(
        self,
        info: ProjectInfo,
        bundle: TemplateBundle,
        options: ApplyOptions,
    ) -> bool:
        """Write every rule artefact for *info* into its project directory."""
        root = info.project_path
        context = self._build_context(info)

        try:
            # Taken before anything is written, so the files below do not
            # make an empty project look populated.
            starts_empty = is_greenfield(root)

            # 1. Guide file
            guide = await bundle.render_guide(root, info.project_name)
            if guide is not None:
                print_step(f"Created {guide.name}")

            # 2. Config files
            for created in await bundle.copy_configs(root):
                print_step(f"Created {created.name}")

            # 3. Git hooks
            if options.git_hooks:
                hook = await self.hooks_gen.generate(root, info.stack, context)
                if hook is None:
                    print_warning("  No .git directory found, skipping git hooks")
                else:
                    print_step("Git hooks configured")

            # 4. Agent contexts
            if options.agents:
                agents_dir = self.config.agents_path(root)
                await self.agents_gen.generate(agents_dir, context)
                print_step(f"Agent context files created in {self.config.agents_dir}/")

            # 5. Greenfield structure
            if options.create_structure or starts_empty:
                await self._create_structure(root, info.stack, context)

            # 6. Stack-specific setup
            await self._setup_stack(root, info.stack)
        except (OSError, RulesError) as exc:
            print_error(f"Error applying rules: {exc}")
            return False

        return True

    # ------------------------------------------------------------------
    # Stack resolution
    # ------------------------------------------------------------------

    def _resolve_project(self, path: str | Path, options: ApplyOptions) -> ProjectInfo:
        info = self.detector.get_project_info(path)

        if info is not None and info.stack is StackId.GREENFIELD:
            if options.force_stack is not None:
                console.print(f"Using specified stack: {options.force_stack.value}")
                return info.with_stack(options.force_stack)
            if options.non_interactive:
                raise StackResolutionError(
                    "Greenfield project detected. Please specify stack with --stack flag:\n"
                    + "\n".join(f"  --stack={s.value}   ({s.label})" for s in CONCRETE_STACKS)
                )
            choice = StackId(self.chooser(CONCRETE_STACKS))
            if not choice.is_concrete:
                raise StackResolutionError(f"Cannot apply rules for stack: {choice.value}")
            console.print(f"Selected stack: {choice.value}")
            return info.with_stack(choice)

        if options.force_stack is not None:
            console.print(f"Forcing stack override: {options.force_stack.value}")
            if info is None:
                return ProjectInfo(
                    stack=options.force_stack,
                    project_name=self.config.default_project_name,
                    project_path=Path(path).resolve(),
                )
            return info.with_stack(options.force_stack)

        if info is None:
            raise StackResolutionError(
                "Cannot detect project stack. Use --stack flag to specify."
            )
        return info

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _build_context(self, info: ProjectInfo) -> dict[str, Any]:
        """Build the Jinja2 template context for generated files."""
        return {
            "project_name": info.project_name,
            "stack": info.stack.value,
            "stack_label": info.stack.label,
            "guide_filename": self.config.guide_filename,
        }

    async def _create_structure(
        self, root: Path, stack: StackId, context: dict[str, Any]
    ) -> None:
        console.print("Creating greenfield project structure...")
        result = await self.structure_gen.create_skeleton(root, stack, context)
        for path in result.files:
            print_step(f"Created {path.relative_to(root).as_posix()}")
        if result.commands:
            console.print(
                f"  {stack.label} structure creation - run dotnet new commands manually:"
            )
            for command in result.commands:
                console.print(f"    [cyan]{command}[/cyan]")

    async def _setup_stack(self, root: Path, stack: StackId) -> None:
        result = await self.structure_gen.setup_stack(root, stack)
        for path in result.directories:
            print_step(f"Created {path.relative_to(root).as_posix()}/")
        if stack.family == "dotnet":
            if result.solution is None:
                print_warning(
                    '  No .sln file found. Consider running "dotnet new sln" first.'
                )
            else:
                print_step(f"Found solution: {result.solution.name}")
        print_step(f"{stack.label} structure ready")

    def _print_next_steps(self, options: ApplyOptions) -> None:
        print_success("\nAgenticAIRulez applied successfully!")
        console.print("\n[bold]Next steps:[/bold]")
        console.print(f"  1. Review the generated {self.config.guide_filename} file")
        console.print("  2. Customize agent contexts for your specific needs")
        console.print("  3. Run your first multi-agent development session")
        console.print("  4. Commit the rules to version control")
        if options.agents:
            console.print("\n[bold]Multi-agent setup enabled:[/bold]")
            console.print("  - Create 3 separate chat sessions for Architect, Builder, and Reviewer")
            console.print(f"  - Copy the agent contexts from {self.config.guide_filename} to each session")
            console.print("  - Follow the agent workflow: Architect -> Builder -> Reviewer")
