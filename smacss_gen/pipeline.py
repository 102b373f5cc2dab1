"""SMACSS generator pipeline.

Runs the generator as a linear sequence of typed stages, each consuming the
previous stage's output:

1. ANSWERS  -- ask the questions (or take them from flags) -> ``AnswerSet``
2. PLAN     -- derive the ``GenerationPlan``
3. SCAFFOLD -- write the plan to disk -> project root
4. INSTALL  -- derive the ``PostInstallPlan`` and carry it out

Usage::

    python -m smacss_gen.pipeline
    python -m smacss_gen.pipeline --app-name "My Site" --app-type simple --skip-install
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from smacss_gen.config import Config
from smacss_gen.installer import InstallFailed, InstallOutcome, InstallRunner, PostInstallPlanner
from smacss_gen.prompts import Prompter, print_welcome
from smacss_gen.scaffolder import (
    AnswerSet,
    AppType,
    Emitter,
    FeatureFlags,
    GenerationPlan,
    InvalidAnswerSet,
    IOWriteError,
    ModuleFlags,
    PlanBuilder,
    PostInstallPlan,
    TemplateRenderError,
)
from smacss_gen.utils import console, print_error, print_section, print_success, print_summary_table

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

WIZARD_ERRORS = (InvalidAnswerSet, TemplateRenderError, IOWriteError, InstallFailed)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class WizardResult:
    """What a completed (or failed) run produced."""

    answers: AnswerSet | None = None
    plan: GenerationPlan | None = None
    project_root: Path | None = None
    post_install: PostInstallPlan | None = None
    install: InstallOutcome | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------


class Wizard:
    """Drives one generator run.

    Attributes:
        config: Run configuration.
        prompter: Collects answers not supplied up front.
        emitter: Writes the generated tree.
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        emitter: Emitter | None = None,
        runner: InstallRunner | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or Prompter()
        self.emitter = emitter or Emitter()
        self.runner = runner or InstallRunner(timeout=config.install.timeout)
        self.planner = PlanBuilder(app_suffix=config.app_suffix)
        self.post_installer = PostInstallPlanner(config)

    async def run(
        self,
        app_name: str | None = None,
        app_type: AppType | None = None,
        features: FeatureFlags | None = None,
        modules: ModuleFlags | None = None,
    ) -> WizardResult:
        """Run every stage; wizard errors are reported and stored on the result."""
        result = WizardResult()
        try:
            if not self.config.skip_welcome_message:
                print_welcome()

            result.answers = self.prompter.collect(app_name, app_type, features, modules)

            print_section("Creating the project structure")
            result.plan = self.planner.build(result.answers)

            target_root = Path(self.config.output_dir).resolve()
            result.project_root = await self.emitter.emit(result.plan, target_root)

            result.post_install = self.post_installer.plan(result.answers, target_root)
            result.install = await self.runner.run(result.post_install)
        except WIZARD_ERRORS as exc:
            result.error = exc
            print_error(f"{type(exc).__name__}: {escape(str(exc))}")
            if isinstance(exc, InstallFailed):
                print_error("Dependencies were not installed; the dev server was not started.")
        return result


def print_result(result: WizardResult) -> None:
    """Summarise a successful run."""
    if result.answers is None or result.project_root is None:
        return
    summary = {
        "App name": result.answers.app_name,
        "App type": result.answers.app_type.label,
        "Location": str(result.project_root),
    }
    if result.plan is not None:
        summary["Files"] = str(len(result.plan.files))
    if result.install is not None:
        summary["Install"] = result.install.state.value
    print_summary_table(summary, title="Project")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

APP_TYPE_ALIASES: dict[str, AppType] = {
    "simple": AppType.SIMPLE_WEB_APP,
    "full": AppType.FULL_PACK_WEB_APP,
    "angular": AppType.ANGULAR_APP,
}


def _parse_flag_list(value: str, allowed: list[str], what: str) -> set[str]:
    names = {part.strip().lower() for part in value.split(",") if part.strip()}
    unknown = names - set(allowed) - {"none"}
    if unknown:
        raise ValueError(f"Unknown {what}: {', '.join(sorted(unknown))} (choose from {', '.join(allowed)})")
    return names - {"none"}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``smacss-gen`` / ``python -m smacss_gen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="SMACSS generator -- scaffold a static or Angular front-end project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  smacss-gen\n"
            "  smacss-gen --app-name 'My Site' --app-type simple --skip-install\n"
            "  smacss-gen --app-type angular --modules route,sanitize -o ./sites\n"
        ),
    )
    parser.add_argument("--output", "-o", default=None, help="Directory to create the project in (default: .)")
    parser.add_argument("--app-name", default=None, help="Name of the app/site (asked if omitted)")
    parser.add_argument(
        "--app-type",
        choices=sorted(APP_TYPE_ALIASES),
        default=None,
        help="Kind of app/site (asked if omitted)",
    )
    parser.add_argument("--features", default=None, help="Comma-separated: jquery,modernizr or none")
    parser.add_argument(
        "--modules", default=None, help="Comma-separated: route,resource,sanitize,animate or none"
    )
    parser.add_argument("--app-suffix", default=None, help="Custom suffix added to the Angular module name")
    parser.add_argument("--skip-welcome-message", action="store_true", help="Skips the welcome message")
    parser.add_argument("--skip-install", action="store_true", help="Skips the installation of dependencies")
    parser.add_argument(
        "--skip-install-message",
        action="store_true",
        help="Skips the message after the installation of dependencies",
    )

    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.output is not None:
        config.output_dir = Path(args.output)
    if args.app_suffix is not None:
        config.app_suffix = args.app_suffix
    config.skip_install = config.skip_install or args.skip_install
    config.skip_install_message = config.skip_install_message or args.skip_install_message
    config.skip_welcome_message = config.skip_welcome_message or args.skip_welcome_message

    features: FeatureFlags | None = None
    modules: ModuleFlags | None = None
    try:
        if args.features is not None:
            picked = _parse_flag_list(args.features, ["jquery", "modernizr"], "features")
            features = FeatureFlags(include_jquery="jquery" in picked, include_modernizr="modernizr" in picked)
        if args.modules is not None:
            picked = _parse_flag_list(args.modules, list(ModuleFlags.model_fields), "modules")
            modules = ModuleFlags(**{name: name in picked for name in ModuleFlags.model_fields})
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(2)

    wizard = Wizard(config)
    app_type = APP_TYPE_ALIASES[args.app_type] if args.app_type else None
    try:
        result = asyncio.run(wizard.run(args.app_name, app_type, features, modules))
    except KeyboardInterrupt:
        print_error("Interrupted.")
        sys.exit(130)

    if result.success:
        print_result(result)
        print_success("Project generated successfully!")
    else:
        sys.exit(1)


if __name__ == "__main__":
    main()
