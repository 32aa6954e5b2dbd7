from __future__ import annotations
from typing import Any, Callable, List, Optional

from .logger import get_logger
from .stream import FStream


class Scope:
    """Cleanup manager for streams and other resources.

    Finalizers run in LIFO order (Last In, First Out) when the scope closes.
    Every finalizer runs even when an earlier one raises; the first failure
    is re-raised once all of them have run.

    Example:
        ```python
        with Scope() as scope:
            lines = scope.closing(FStream.from_stream(open("data.txt")))
            head = lines.take(10)
            ...
        # lines.close() has run here
        ```

    Note that closing an already exhausted source stream raises
    ``AlreadyClosed``, which the scope reports like any other failure.
    """
    def __init__(self):
        self._finalizers: List[Callable[[], Any]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add_finalizer(self, fin: Callable[[], Any]) -> None:
        """Add a cleanup function to be called when the scope closes.

        If the scope is already closed, the finalizer is executed immediately.
        """
        if self._closed: fin()
        else: self._finalizers.append(fin)

    def closing(self, stream: FStream[Any]) -> FStream[Any]:
        self.add_finalizer(stream.close)
        return stream

    def close(self) -> None:
        if self._closed: return
        self._closed = True
        first: Optional[BaseException] = None
        while self._finalizers:
            fin = self._finalizers.pop()
            try:
                fin()
            except Exception as ex:
                get_logger().warn("scope finalizer failed", error=repr(ex))
                if first is None:
                    first = ex
        if first is not None:
            raise first

    def __enter__(self) -> "Scope":
        return self

    def __exit__(self, et, e, tb) -> None:
        if e is None:
            self.close()
            return
        try:
            self.close()
        except Exception as ex:
            get_logger().warn("scope close failed while handling another error", error=repr(ex), cause=repr(e))
