"""Build event dispatch via pluggy, inline or on a ThreadPoolExecutor.

INVARIANT: Plugin failures are warnings, never errors. A hook that raises
is logged and recorded; the build carries on.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from assetctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatch build events to registered plugins.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Dispatch inline on the caller's thread (``--sync``, tests).
        max_workers: ThreadPoolExecutor worker count for async dispatch.
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = False,
        max_workers: int = 2,
    ) -> None:
        self._pm = plugin_manager
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="events")
        )
        self._futures: list[Future[None]] = []
        self._failures: list[str] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, hook_name: str, **payload: Any) -> None:
        """Fire *hook_name* with *payload*, inline or on the pool."""
        if self._executor is None:
            self._execute_hook(hook_name, payload)
            return
        future = self._executor.submit(self._execute_hook, hook_name, payload)
        with self._lock:
            self._futures.append(future)

    def drain(self) -> list[str]:
        """Wait for in-flight dispatches and return (then clear) recorded failures."""
        with self._lock:
            futures, self._futures = self._futures, []
        for future in futures:
            future.result()
        with self._lock:
            failures, self._failures = self._failures, []
        return failures

    def shutdown(self) -> None:
        """Drain, then stop the worker pool."""
        self.drain()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_hook(self, hook_name: str, payload: dict[str, Any]) -> None:
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            return
        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            with self._lock:
                self._failures.append(f"Plugin hook {hook_name} failed: {exc}")
