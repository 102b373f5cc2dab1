"""Interactive questions for the generator.

``Prompter`` asks the app name, the app type, and (when the app type calls for
them) the optional features and Angular modules, then returns a validated
``AnswerSet``.  Answers already known, for example from command-line flags,
are not asked again.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from smacss_gen.scaffolder.models import AnswerSet, AppType, FeatureFlags, ModuleFlags
from smacss_gen.utils import console as default_console
from smacss_gen.utils import default_app_name, print_section

# (label, field name, pre-checked)
FEATURE_CHOICES: list[tuple[str, str, bool]] = [
    ("jQuery", "include_jquery", True),
    ("Modernizr", "include_modernizr", False),
]

MODULE_CHOICES: list[tuple[str, str, bool]] = [
    ("Angular Route", "route", True),
    ("Angular Resource", "resource", False),
    ("Angular Sanitize", "sanitize", False),
    ("Angular Animate", "animate", False),
]

APP_TYPE_CHOICES: list[AppType] = [
    AppType.SIMPLE_WEB_APP,
    AppType.FULL_PACK_WEB_APP,
    AppType.ANGULAR_APP,
]
DEFAULT_APP_TYPE = AppType.FULL_PACK_WEB_APP

_NONE_ANSWERS = {"none", "-", "0"}


def print_welcome(console: Console | None = None) -> None:
    """Print the welcome banner."""
    out = console or default_console
    out.print(
        Panel(
            "[bold]Yo! Welcome to SMACSS[/bold]\n"
            "[bold magenta]You're using the perfectionist generator for frontend.[/bold magenta]",
            border_style="magenta",
            expand=False,
        )
    )
    out.print("[grey50]Answer simple questions to kick start your project[/grey50]")


class Prompter:
    """Collects an ``AnswerSet`` from the terminal."""

    def __init__(self, console: Console | None = None, cwd: str | Path | None = None) -> None:
        self.console = console or default_console
        self.cwd = cwd

    def collect(
        self,
        app_name: str | None = None,
        app_type: AppType | None = None,
        features: FeatureFlags | None = None,
        modules: ModuleFlags | None = None,
    ) -> AnswerSet:
        """Ask every question not already answered and return the answers.

        Features are asked only for full pack and Angular apps, modules only
        for Angular apps.
        """
        if app_name is None:
            app_name = self.ask_app_name()
        if app_type is None:
            app_type = self.ask_app_type()
        if app_type.has_partials and features is None:
            features = self.ask_features()
        if app_type is AppType.ANGULAR_APP and modules is None:
            modules = self.ask_modules()

        raw: dict = {"app_name": app_name, "app_type": app_type}
        if features is not None:
            raw["features"] = features
        if modules is not None:
            raw["modules"] = modules
        return AnswerSet.from_raw(raw)

    # -- Individual questions ----------------------------------------------

    def ask_app_name(self) -> str:
        return Prompt.ask(
            "What would you like to name your app/site?",
            default=default_app_name(self.cwd),
            console=self.console,
        )

    def ask_app_type(self) -> AppType:
        self.console.print("Kind of app/site you are trying to build?")
        for index, choice in enumerate(APP_TYPE_CHOICES, 1):
            self.console.print(f"  {index}) {choice.label}")
        answer = Prompt.ask(
            "Enter number",
            choices=[str(i) for i in range(1, len(APP_TYPE_CHOICES) + 1)],
            default=str(APP_TYPE_CHOICES.index(DEFAULT_APP_TYPE) + 1),
            console=self.console,
        )
        return APP_TYPE_CHOICES[int(answer) - 1]

    def ask_features(self) -> FeatureFlags:
        selected = self._ask_many("How about some additional features", FEATURE_CHOICES)
        return FeatureFlags(**{name: name in selected for _, name, _ in FEATURE_CHOICES})

    def ask_modules(self) -> ModuleFlags:
        selected = self._ask_many("How about including some angular modules", MODULE_CHOICES)
        return ModuleFlags(**{name: name in selected for _, name, _ in MODULE_CHOICES})

    # -- Helpers -----------------------------------------------------------

    def _ask_many(self, message: str, choices: list[tuple[str, str, bool]]) -> set[str]:
        """Multi-choice question; returns the field names of the selected options."""
        print_section(message)
        for index, (label, _, checked) in enumerate(choices, 1):
            mark = "x" if checked else " "
            self.console.print(f"  \\[{mark}] {index}) {label}")
        default = ",".join(str(i) for i, (_, _, checked) in enumerate(choices, 1) if checked)

        while True:
            answer = Prompt.ask(
                "Enter numbers separated by commas ('none' for none)",
                default=default or "none",
                console=self.console,
            )
            selected = parse_selection(answer, len(choices))
            if selected is not None:
                return {choices[i - 1][1] for i in selected}
            self.console.print(f"[bold yellow]Please pick numbers between 1 and {len(choices)}.[/bold yellow]")


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Parse ``"1, 3"`` into ``[1, 3]``.

    Returns ``[]`` for an explicit "none" and ``None`` when the answer is not
    a valid selection.
    """
    text = answer.strip().lower()
    if text in _NONE_ANSWERS:
        return []
    picked: list[int] = []
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= count:
            return None
        if int(part) not in picked:
            picked.append(int(part))
    return picked
