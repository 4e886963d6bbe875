from typing import Protocol


class FileWatcherPort(Protocol):
    """Background watch over a source tree that re-lints files as they change."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
