from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import Change, DefaultFilter, awatch

from lint40.core.languages import is_c_source
from lint40.core.session import LintSession
from lint40.models import Diagnostic
from lint40.workspace.memory import InMemoryDocument

logger = logging.getLogger(__name__)

OnChange = Callable[[set[Path]], Coroutine[Any, Any, None]]


class CSourceFilter(DefaultFilter):
    """Pass only ``.c``/``.h`` files, on top of the default ignores (``.git``, ``__pycache__``, editor swap files)."""

    def __call__(self, change: Change, path: str) -> bool:
        return is_c_source(Path(path)) and super().__call__(change, path)


class WatchfilesWatcher:
    """Re-run ``on_change`` with the C files touched by each batch of changes under ``directory``.

    Implements the ``FileWatcherPort`` protocol. A failing callback is logged and the watch continues.
    """

    def __init__(self, directory: str | Path, on_change: OnChange) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._filter = CSourceFilter()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watching %s for C source changes", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s", self._directory)

    async def _watch(self) -> None:
        async for changes in awatch(self._directory, watch_filter=self._filter):
            paths = {Path(p) for _, p in changes}
            logger.info("%d C file(s) changed", len(paths))
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Re-lint after file change failed")


def relint_on_change(
    session: LintSession,
    report: Callable[[Path, list[Diagnostic]], None],
) -> OnChange:
    """Build a watcher callback that re-reads changed files and re-lints them in ``session``.

    Deleted files are closed so their diagnostics are dropped from the sink.
    """

    async def _on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            if not path.exists():
                session.close(path.resolve().as_uri())
                logger.debug("Closed deleted file %s", path)
                continue
            document = InMemoryDocument.from_path(path)
            report(path, session.open(document))

    return _on_change
