"""Shared utility functions for the SMACSS generator.

Provides async command execution, app-name normalization, formatting helpers
and Rich-based console reporting.
"""

from __future__ import annotations

import asyncio
import re
import unicodedata
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    capture: bool = True,
    env: dict[str, str] | None = None,
    echo: bool = False,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of ``os.environ``.
        echo: Print each output line to the console as it arrives while still
            capturing it.  Implies *capture*.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timed-out command returns
        ``-1`` and a message on stderr.

    Raises:
        asyncio.CancelledError: The caller was cancelled; the child process
            has been killed and reaped before this propagates.
    """
    import os

    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    pipe = asyncio.subprocess.PIPE if capture or echo else None

    if isinstance(cmd, list):
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=pipe,
            stderr=pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    else:
        process = await asyncio.create_subprocess_shell(
            cmd,
            stdout=pipe,
            stderr=pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )

    try:
        if echo:
            stdout_str, stderr_str = await asyncio.wait_for(_echo_output(process), timeout=timeout)
        else:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(), timeout=timeout
            )
            stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
            stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    except asyncio.TimeoutError:
        await _kill(process)
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {cmd if isinstance(cmd, str) else ' '.join(cmd)}",
        )
    except asyncio.CancelledError:
        await _kill(process)
        raise

    return (process.returncode or 0, stdout_str, stderr_str)


async def _echo_output(process: asyncio.subprocess.Process) -> tuple[str, str]:
    """Stream both pipes to the console line by line until the process exits."""
    stdout_lines: list[str] = []
    stderr_lines: list[str] = []
    await asyncio.gather(
        _pump(process.stdout, stdout_lines, "dim"),
        _pump(process.stderr, stderr_lines, "yellow"),
    )
    await process.wait()
    return "\n".join(stdout_lines).strip(), "\n".join(stderr_lines).strip()


async def _pump(stream: asyncio.StreamReader, sink: list[str], style: str) -> None:
    while True:
        raw = await stream.readline()
        if not raw:
            break
        line = raw.decode("utf-8", errors="replace").rstrip()
        sink.append(line)
        console.print(line, style=style, markup=False, highlight=False)


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        process.kill()
    await process.wait()


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def humanize(text: str) -> str:
    """Turn ``someName`` / ``some_name`` / ``some-name`` into ``Some name``."""
    underscored = re.sub(r"([a-z\d])([A-Z]+)", r"\1_\2", text.strip())
    underscored = re.sub(r"[-\s]+", "_", underscored).lower()
    underscored = re.sub(r"_id$", "", underscored)
    words = underscored.replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphenated, ASCII-only slug."""
    cleaned = re.sub(r"[^\w\s-]", "-", _strip_diacritics(text)).lower()
    slug = re.sub(r"[-_\s]+", "-", cleaned.strip())
    return slug.strip("-")


def camelize(text: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    return re.sub(r"[-_\s]+(.)?", lambda m: (m.group(1) or "").upper(), text.strip())


def normalize_app_name(name: str) -> str:
    """Normalize a free-text app name to a camel-cased slug.

    Applying it twice gives the same result as applying it once.

    Examples::

        normalize_app_name("My Site")          -> "mySite"
        normalize_app_name("generator-smacss") -> "generatorSmacss"
        normalize_app_name("  Café Crème ")    -> "cafeCreme"
    """
    return camelize(slugify(humanize(name)))


def default_app_name(cwd: str | Path | None = None) -> str:
    """Default answer for the app-name question: the working directory's base name."""
    base = Path(cwd).resolve() if cwd is not None else Path.cwd()
    return normalize_app_name(base.name) or "app"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section(title: str, color: str = "grey50") -> None:
    """Print a full-width rule with *title*, the separator between wizard stages."""
    console.print()
    console.print(Rule(f"[{color}]{title}[/{color}]", style=color))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
