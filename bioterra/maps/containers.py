"""
Container registry and post-render scheduler.

Streamlit re-runs the page script top to bottom on every interaction, so a
"DOM container" only exists for the script run that rendered it.  The page
registers each map container here as it renders it and clears the registry
at the start of the next run.  The map adapter looks containers up through
``ContainerRegistry.get`` and never touches Streamlit directly.

``RenderScheduler`` is the bounded-retry fallback for environments that do
not emit the adapter's ``container_mounted`` signal: callbacks queued with
``call_later`` run on the next ``drain()``, which the page calls once the
render pass has settled.  A callback queued while draining waits for the
following drain, so each retry costs one render pass and never blocks.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ContainerRegistry:
    """Maps container ids to the placeholder objects rendered this run."""

    def __init__(self):
        self._containers: Dict[str, Any] = {}

    def register(self, container_id: str, container: Any = True) -> None:
        self._containers[container_id] = container

    def unregister(self, container_id: str) -> None:
        self._containers.pop(container_id, None)

    def get(self, container_id: str) -> Optional[Any]:
        return self._containers.get(container_id)

    def clear(self) -> None:
        self._containers.clear()

    def __contains__(self, container_id) -> bool:
        return container_id in self._containers


class RenderScheduler:
    """Queue of callbacks to run after the current render settles."""

    def __init__(self):
        self._queue: List[Tuple[float, Callable[[], None]]] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> None:
        """Queue ``callback``; ``delay_s`` is the minimum spacing requested.

        Callbacks only run on ``drain()``, i.e. at the end of a script run.
        The page keeps the retries moving by sleeping ``delay_s`` and
        rerunning while a mount is pending (``session.finish_render``), so
        the delay here is recorded for logging only.
        """
        self._queue.append((delay_s, callback))

    def drain(self) -> int:
        """Run every callback queued before this call; return how many ran."""
        batch, self._queue = self._queue, []
        for delay_s, callback in batch:
            logger.debug(f"[Scheduler] Running deferred callback (requested delay {delay_s:.3f}s)")
            callback()
        return len(batch)

    def pending(self) -> int:
        return len(self._queue)
