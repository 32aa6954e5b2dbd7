from __future__ import annotations
from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

from .logger import get_logger
from .option import EMPTY, FOption

T = TypeVar("T")
U = TypeVar("U")
B = TypeVar("B")


class AlreadyClosed(Exception):
    pass


class TypeMismatch(TypeError):
    pass


_UNSET = object()


class FStream(Generic[T]):
    """Lazy pull-based sequence.

    ``next()`` is the only primitive: it returns the next element wrapped in a
    present ``FOption``, or ``EMPTY`` once the stream is exhausted. Every
    operator returns a new stream that pulls from this one only when it is
    pulled itself; composing over a stream hands it over to the new stream.
    Instances are not safe to share between threads.

    Example:
        ```python
        FStream.of(5, 3, 1, 4, 2).filter(lambda x: x > 1).sort().to_list()
        # [2, 3, 4, 5]
        ```
    """

    def next(self) -> FOption[T]: raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> "FStream[T]":
        return self

    def __exit__(self, et, e, tb) -> None:
        if e is None:
            self.close()
            return
        # The body's exception stays the one that propagates.
        try:
            self.close()
        except Exception as ex:
            get_logger().warn("close failed while handling another error", error=repr(ex), cause=repr(e))

    # --- sources ---

    @staticmethod
    def empty() -> "FStream[T]":
        return _Derived(lambda: EMPTY)

    @staticmethod
    def of(*values: T) -> "FStream[T]":
        return _Source(iter(values), "values")

    @staticmethod
    def from_iterable(values: Iterable[T]) -> "FStream[T]":
        return _Source(iter(values), "iterable")

    @staticmethod
    def from_iterator(it: Iterator[T]) -> "FStream[T]":
        return _Source(it, "iterator")

    @staticmethod
    def from_stream(producer: Iterable[T]) -> "FStream[T]":
        """Wrap a generator or other stream-like producer.

        Closing the resulting stream before it is exhausted also calls the
        producer's own ``close()`` (generators, file objects).
        """
        return _Source(iter(producer), "stream")

    # --- slicing ---

    def take(self, n: int) -> "FStream[T]":
        """First ``n`` elements, then drain this stream completely.

        Once ``n`` elements have been pulled the next pull exhausts the
        parent before returning ``EMPTY``, so the parent is always fully
        consumed by the time the taken stream reports the end.
        """
        n = max(0, n)
        state = {"taken": 0, "drained": False}

        def pull() -> FOption[T]:
            if state["taken"] < n:
                state["taken"] += 1
                return self.next()
            if not state["drained"]:
                state["drained"] = True
                discarded = self._drain()
                get_logger().debug("take drained parent", limit=n, discarded=discarded)
            return EMPTY

        return _Derived(pull)

    def drop(self, n: int) -> "FStream[T]":
        state = {"dropped": n <= 0}

        def pull() -> FOption[T]:
            if not state["dropped"]:
                state["dropped"] = True
                for _ in range(n):
                    self.next()
            return self.next()

        return _Derived(pull)

    # --- filtering and mapping ---

    def filter(self, pred: Callable[[T], bool]) -> "FStream[T]":
        def pull() -> FOption[T]:
            while True:
                nxt = self.next()
                if nxt.is_absent():
                    return EMPTY
                if pred(nxt.get()):
                    return nxt

        return _Derived(pull)

    def map(self, mapper: Callable[[T], U]) -> "FStream[U]":
        def pull() -> FOption[U]:
            nxt = self.next()
            if nxt.is_absent():
                return EMPTY
            return FOption.of(mapper(nxt.get()))

        return _Derived(pull)

    def flat_map(self, mapper: Callable[[Any], U]) -> "FStream[U]":
        """Map after unwrapping nested ``FOption`` elements.

        An element that is itself an ``FOption`` is unwrapped (repeatedly)
        before ``mapper`` sees it; an absent one yields ``EMPTY``. Elements
        are not expected to be streams and nothing is concatenated.
        """
        def pull() -> FOption[U]:
            nxt = self.next()
            if nxt.is_absent():
                return EMPTY
            value: Any = nxt.get()
            while isinstance(value, FOption):
                if value.is_absent():
                    return EMPTY
                value = value.get()
            return FOption.of(mapper(value))

        return _Derived(pull)

    # --- terminal operations ---

    def _values(self) -> Iterator[T]:
        nxt = self.next()
        while nxt.is_present():
            yield nxt.get()
            nxt = self.next()

    def _drain(self) -> int:
        count = 0
        for _ in self._values():
            count += 1
        return count

    def for_each(self, effect: Callable[[T], Any]) -> None:
        for v in self._values():
            effect(v)

    def to_list(self) -> List[T]:
        return list(self._values())

    def to_set(self) -> Set[T]:
        return set(self._values())

    def to_array(self, component_type: type) -> Tuple[Any, ...]:
        out: List[Any] = []
        for v in self._values():
            if not isinstance(v, component_type):
                raise TypeMismatch(f"Cannot cast {type(v).__name__} to {getattr(component_type, '__name__', component_type)}")
            out.append(v)
        return tuple(out)

    def iterator(self) -> Iterator[T]:
        return iter(self.to_list())

    def __iter__(self) -> Iterator[T]:
        return self.iterator()

    def stream(self) -> Iterator[T]:
        items = self.to_list()
        return (x for x in items)

    def sort(self, comparator: Optional[Callable[[T, T], int]] = None, *, key: Optional[Callable[[T], Any]] = None, reverse: bool = False) -> "FStream[T]":
        """Materialize, sort and return a fresh source stream over the result.

        ``comparator`` is a two-argument ``cmp(a, b) -> int``; ``key`` is the
        usual one-argument sort key. With neither the natural order is used.
        """
        if comparator is not None and key is not None:
            raise ValueError("pass either comparator or key, not both")
        items = self.to_list()
        items.sort(key=cmp_to_key(comparator) if comparator is not None else key, reverse=reverse)
        get_logger().debug("sort materialized stream", size=len(items))
        return FStream.of(*items)

    def fold(self, initial: B, f: Callable[[B, T], B]) -> B:
        acc: B = initial
        for v in self._values():
            acc = f(acc, v)
        return acc

    def head(self) -> FOption[T]:
        return self.next()


class _Source(FStream[T]):
    """Stream over a Python iterator, with one element of look-ahead."""

    def __init__(self, it: Iterator[T], kind: str):
        self._it = it
        self._kind = kind
        self._head: Any = _UNSET

    def _has_next(self) -> bool:
        if self._head is _UNSET:
            try:
                self._head = next(self._it)
            except StopIteration:
                return False
        return True

    def next(self) -> FOption[T]:
        if not self._has_next():
            return EMPTY
        v = self._head
        self._head = _UNSET
        return FOption.of(v)

    def close(self) -> None:
        # Closing only succeeds while something is left to discard.
        if not self._has_next():
            raise AlreadyClosed("Stream has already been closed")
        discarded, self._it = self._it, iter(())
        self._head = _UNSET
        closer = getattr(discarded, "close", None)
        if callable(closer):
            closer()
        get_logger().debug("closed source stream", kind=self._kind)


class _Derived(FStream[T]):
    def __init__(self, pull: Callable[[], FOption[T]]):
        self._pull = pull

    def next(self) -> FOption[T]:
        return self._pull()
