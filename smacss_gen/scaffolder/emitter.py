"""Materializes a ``GenerationPlan`` on disk.

The project root (with any missing parents) and the plan directories are
created first, in plan order, then each file is rendered or copied and
written in plan order.  Writes go through ``asyncio.to_thread`` but
run strictly one after another: the first failure stops the run and nothing
after it is attempted.  Nothing already written is rolled back.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from smacss_gen.utils import console

from .models import GenerationPlan, TemplateRef
from .templates import TemplateRenderer


class IOWriteError(Exception):
    """Raised when a directory or file of the plan cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot write {path}: {message}")


class Emitter:
    """Writes a ``GenerationPlan`` under a target root directory."""

    def __init__(self, renderer: TemplateRenderer | None = None, *, quiet: bool = False) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.quiet = quiet

    async def emit(self, plan: GenerationPlan, target_root: str | Path) -> Path:
        """Create the project tree for *plan* under ``target_root/<app_name>``.

        Existing files are overwritten; existing directories are reused.

        Returns:
            Path to the project root.

        Raises:
            TemplateRenderError: A templated file could not be rendered.
            IOWriteError: A directory or file could not be written.
        """
        project_root = Path(target_root) / plan.app_name
        await asyncio.to_thread(_make_dir, project_root)

        for directory in plan.directories:
            await asyncio.to_thread(_make_dir, project_root / directory)

        for ref in plan.files:
            content = self._content_for(ref, plan)
            dest = project_root / ref.dest_path
            await asyncio.to_thread(_write_file, dest, content)
            if not self.quiet:
                console.print(f"   [green]create[/green] {plan.app_name}/{ref.dest_path}")

        return project_root

    def _content_for(self, ref: TemplateRef, plan: GenerationPlan) -> bytes:
        if ref.is_templated:
            return self.renderer.render(ref.source_key, plan.context).encode("utf-8")
        return self.renderer.read_static(ref.source_key)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOWriteError(path, exc.strerror or str(exc)) from exc


def _write_file(path: Path, content: bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as exc:
        raise IOWriteError(path, exc.strerror or str(exc)) from exc
