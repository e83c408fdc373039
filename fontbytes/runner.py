"""
Background generation for interactive callers.

An editor regenerates the source code every time an option or a glyph
changes.  SourceCodeRunner runs each request on a worker thread and hands
only the result of the newest request to the completion handler; results
of requests that were superseded while running are dropped.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable

from .fontdata import Face
from .formats import Format
from .generator import DEFAULT_FONT_NAME, FontSourceCodeGenerator, SourceCodeOptions


class SourceCodeRunner:
    """
    Args:
        on_finished: called with the generated text of the newest request
        on_error: called with the exception if the newest request failed
        executor: runs the requests; a single worker thread by default
    """

    def __init__(
        self,
        on_finished: Callable[[str], None],
        on_error: Callable[[BaseException], None] | None = None,
        executor: Executor | None = None,
    ):
        self._on_finished = on_finished
        self._on_error = on_error
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1)
        self._lock = threading.Lock()
        self._latest = 0

    def submit(self, face: Face, options: SourceCodeOptions, fmt: Format | str,
               font_name: str = DEFAULT_FONT_NAME) -> Future:
        """
        Queue generation for ``face``.

        The face is immutable, so it is already the snapshot the worker
        needs.  Returns the future of this request.
        """
        with self._lock:
            self._latest += 1
            request = self._latest

        generator = FontSourceCodeGenerator(options)
        future = self._executor.submit(generator.generate, face, fmt, font_name)
        future.add_done_callback(lambda f: self._deliver(request, f))
        return future

    def is_current(self, request: int) -> bool:
        with self._lock:
            return request == self._latest

    def _deliver(self, request: int, future: Future) -> None:
        if future.cancelled() or not self.is_current(request):
            return
        error = future.exception()
        if error is None:
            self._on_finished(future.result())
        elif self._on_error is not None:
            self._on_error(error)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
