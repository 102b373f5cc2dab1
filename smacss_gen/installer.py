"""Post-generation dependency installation.

``PostInstallPlanner`` decides what should happen once the project tree is on
disk: which install command applies to the app type, whether to run it, and
what to tell the user.  ``InstallRunner`` carries a plan out: it runs the
install steps one by one in the project directory, then starts the dev server.

Runner states::

    PLANNED -> SKIPPED
    PLANNED -> INSTALL_REQUESTED -> INSTALLING -> INSTALLED -> SERVER_STARTED
                                                 \\-> INSTALL_FAILED

A failed, timed-out or interrupted install ends in ``INSTALL_FAILED`` and
raises ``InstallFailed``; the dev server is never started after that.
"""

from __future__ import annotations

import asyncio
import shlex
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from smacss_gen.config import Config
from smacss_gen.scaffolder.models import AnswerSet, AppType, PostInstallPlan
from smacss_gen.utils import console, format_duration, print_section, print_warning, run_command


class InstallState(str, Enum):
    PLANNED = "planned"
    SKIPPED = "skipped"
    INSTALL_REQUESTED = "install_requested"
    INSTALLING = "installing"
    INSTALLED = "installed"
    SERVER_STARTED = "server_started"
    INSTALL_FAILED = "install_failed"


class InstallFailed(Exception):
    """Raised when an install step exits non-zero, times out, or is interrupted."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()[:500]}" if stderr.strip() else ""
        super().__init__(f"`{' '.join(command)}` failed with exit code {returncode}{detail}")


@dataclass
class InstallOutcome:
    """Structured result of carrying out a ``PostInstallPlan``."""

    state: InstallState = InstallState.PLANNED
    steps_run: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    server_returncode: int | None = None


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------

NEXT_STEPS = (
    "Next Steps:"
    "\n1) Now [bold yellow]cd {app_name}[/bold yellow] into your project folder"
    "\n2) Install dependencies by typing [bold yellow]{install_command}[/bold yellow]"
    "\n3) Run the server using: [bold yellow]{serve_command}[/bold yellow]"
)


class PostInstallPlanner:
    """Maps answers and configuration to a ``PostInstallPlan``."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    def plan(self, answers: AnswerSet, cwd: str | Path | None = None) -> PostInstallPlan:
        """Return the post-install plan for *answers*.

        Args:
            answers: The run's answers.
            cwd: Directory the project was generated in. Defaults to
                ``config.output_dir``.
        """
        install = self.config.install
        base = Path(cwd) if cwd is not None else self.config.output_dir
        steps = self.install_steps(answers.app_type)
        install_command = " && ".join(" ".join(step) for step in steps)
        serve_command = shlex.split(install.serve_command)

        return PostInstallPlan(
            install_command=install_command,
            auto_run=not self.config.skip_install,
            app_path=(base / answers.app_name).resolve(),
            install_steps=steps,
            serve_command=serve_command if install.start_server else [],
            instructions=NEXT_STEPS.format(
                app_name=answers.app_name,
                install_command=install_command,
                serve_command=install.serve_command,
            ),
            show_messages=not self.config.skip_install_message,
        )

    def install_steps(self, app_type: AppType) -> list[list[str]]:
        """npm always; bower too when the app type ships a ``bower.json``."""
        install = self.config.install
        steps = [[install.npm_command, "install"]]
        if app_type.has_partials:
            steps.append([install.bower_command, "install"])
        return steps


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


class InstallRunner:
    """Executes a ``PostInstallPlan``.

    Args:
        timeout: Per-step timeout in seconds for the install commands.
    """

    def __init__(self, timeout: int = 600) -> None:
        self.timeout = timeout
        self.state = InstallState.PLANNED

    async def run(self, plan: PostInstallPlan) -> InstallOutcome:
        """Install dependencies (or print instructions) and start the dev server.

        Raises:
            InstallFailed: An install step failed; the dev server was not started.
        """
        outcome = InstallOutcome()
        start = time.monotonic()

        if not plan.auto_run:
            self._transition(outcome, InstallState.SKIPPED)
            if plan.show_messages:
                print_section("Follow the instructions below")
                console.print(plan.instructions)
            return outcome

        self._transition(outcome, InstallState.INSTALL_REQUESTED)
        print_section("Installing Dependencies, please wait...")

        self._transition(outcome, InstallState.INSTALLING)
        for step in plan.install_steps:
            await self._run_step(step, plan.app_path, outcome)
        self._transition(outcome, InstallState.INSTALLED)
        outcome.duration_seconds = time.monotonic() - start

        if plan.show_messages:
            print_section(
                f"Dependencies Installed in {format_duration(outcome.duration_seconds)}, "
                "please wait we start the server..."
            )

        if plan.serve_command:
            outcome.server_returncode = await self._start_server(plan, outcome)
        return outcome

    async def _run_step(self, step: list[str], cwd: Path, outcome: InstallOutcome) -> None:
        console.print(f"[dim]$ {' '.join(step)}[/dim]")
        try:
            returncode, _stdout, stderr = await run_command(
                step, cwd=cwd, timeout=self.timeout, echo=True
            )
        except FileNotFoundError as exc:
            self._transition(outcome, InstallState.INSTALL_FAILED)
            raise InstallFailed(step, 127, f"command not found: {exc.filename or step[0]}") from exc
        except (asyncio.CancelledError, KeyboardInterrupt) as exc:
            self._transition(outcome, InstallState.INSTALL_FAILED)
            raise InstallFailed(step, -1, "interrupted") from exc

        outcome.steps_run.append(" ".join(step))
        if returncode != 0:
            self._transition(outcome, InstallState.INSTALL_FAILED)
            raise InstallFailed(step, returncode, stderr)

    async def _start_server(self, plan: PostInstallPlan, outcome: InstallOutcome) -> int:
        """Spawn the dev server in the project directory and wait for it to exit."""
        try:
            process = await asyncio.create_subprocess_exec(
                *plan.serve_command, cwd=str(plan.app_path)
            )
        except FileNotFoundError:
            print_warning(
                f"Could not start `{' '.join(plan.serve_command)}`; "
                f"run it yourself from {plan.app_path}"
            )
            return 127
        self._transition(outcome, InstallState.SERVER_STARTED)
        return await process.wait()

    def _transition(self, outcome: InstallOutcome, state: InstallState) -> None:
        self.state = state
        outcome.state = state
