# src/seo_grader/utils/loop_runner.py
from __future__ import annotations

import asyncio
import threading
from typing import Any, Coroutine, Optional

_MAIN_LOOP: Optional[asyncio.AbstractEventLoop] = None
_THREAD: Optional[threading.Thread] = None
_LOCK = threading.Lock()


def ensure_background_loop() -> asyncio.AbstractEventLoop:
    """
    Ensures a persistent asyncio event loop is running on a background thread
    and returns it. Calling it again reuses the running loop.
    """
    global _MAIN_LOOP, _THREAD
    with _LOCK:
        if _MAIN_LOOP is not None:
            return _MAIN_LOOP

        loop = asyncio.new_event_loop()

        def _run_loop(loop_: asyncio.AbstractEventLoop) -> None:
            asyncio.set_event_loop(loop_)
            loop_.run_forever()

        t = threading.Thread(target=_run_loop, args=(loop,), daemon=True, name="seo-grader-loop")
        t.start()

        _MAIN_LOOP = loop
        _THREAD = t
        return loop


def run_sync(coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
    """
    Executes a coroutine from synchronous code and waits for the result.

    When no event loop is running in the calling thread, asyncio.run() is used.
    Inside a running loop (e.g. a notebook or an async host) the coroutine is
    submitted to the background loop instead, since asyncio.run() cannot nest.

    Args:
        coro: The coroutine to execute.
        timeout (float | None): Optional timeout in seconds to wait for the result.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(asyncio.wait_for(coro, timeout) if timeout else coro)

    loop = ensure_background_loop()
    fut = asyncio.run_coroutine_threadsafe(coro, loop)
    return fut.result(timeout)
