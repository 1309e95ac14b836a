"""Hot reload of page templates.

Polls the templates directory and reloads the registry whenever a file is
added, removed or modified.
"""

import asyncio
import contextlib
from pathlib import Path

from search_site.exceptions import TemplateLoadException
from search_site.logging_config import get_logger, log_with_context
from search_site.state_managers import TemplateRegistry

logger = get_logger(__name__)


def snapshot_templates(templates_dir: Path) -> dict[str, float]:
    """Map every file below templates_dir to its modification time.

    A missing directory yields an empty snapshot.
    """
    templates_dir = Path(templates_dir)
    if not templates_dir.is_dir():
        return {}

    snapshot: dict[str, float] = {}
    for path in templates_dir.rglob("*"):
        if path.is_file():
            with contextlib.suppress(FileNotFoundError):  # deleted mid-scan
                snapshot[str(path.relative_to(templates_dir))] = path.stat().st_mtime
    return snapshot


class TemplateWatcher:
    """Background task that reloads a TemplateRegistry when its files change."""

    def __init__(self, registry: TemplateRegistry, templates_dir: Path, interval: float = 1.0):
        self._registry = registry
        self._templates_dir = Path(templates_dir)
        self._interval = interval
        self._snapshot: dict[str, float] = {}
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Take the initial snapshot and start polling."""
        if self.running:
            return
        self._snapshot = await asyncio.to_thread(snapshot_templates, self._templates_dir)
        self._task = asyncio.create_task(self._run(), name="template-watcher")
        log_with_context(
            logger,
            "info",
            "Template watcher started",
            templates_dir=str(self._templates_dir),
            interval=self._interval,
            event_type="template_watcher_start",
        )

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        log_with_context(
            logger,
            "info",
            "Template watcher stopped",
            event_type="template_watcher_stop",
        )

    async def check_once(self) -> bool:
        """Reload the registry if any template file changed since the last check.

        Returns:
            True if a change was detected (whether or not the reload succeeded)
        """
        snapshot = await asyncio.to_thread(snapshot_templates, self._templates_dir)
        if snapshot == self._snapshot:
            return False

        changed = sorted(set(snapshot.items()) ^ set(self._snapshot.items()))
        self._snapshot = snapshot
        log_with_context(
            logger,
            "info",
            "Template change detected",
            changed_files=sorted({path for path, _ in changed}),
            event_type="template_change",
        )

        try:
            await self._registry.reload()
        except TemplateLoadException as e:
            # Previous templates keep serving until the file is fixed
            log_with_context(
                logger,
                "error",
                "Template hot reload failed",
                error=e.message,
                details=e.details,
                event_type="template_reload_error",
            )
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.check_once()
            except Exception as e:
                # Polling continues; the next change gets another chance
                log_with_context(
                    logger,
                    "error",
                    "Template watcher check failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    event_type="template_watcher_error",
                )
