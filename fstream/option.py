from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ElementMissing(LookupError):
    pass


@dataclass(frozen=True, eq=False, repr=False)
class FOption(Generic[T]):
    """Value-or-absent box.

    Absence and ``None`` are the same thing here: ``FOption.of(None)`` is the
    shared ``EMPTY`` instance, so ``None`` cannot be carried as a value.
    """

    _value: Optional[T]
    _defined: bool

    @staticmethod
    def of(value: Optional[T]) -> "FOption[T]":
        if value is None:
            return EMPTY  # type: ignore[return-value]
        return FOption(value, True)

    @staticmethod
    def empty() -> "FOption[T]":
        return EMPTY  # type: ignore[return-value]

    def is_present(self) -> bool: return self._defined
    def is_absent(self) -> bool: return not self._defined

    def get(self) -> T:
        if not self._defined:
            raise ElementMissing("No element exists")
        return self._value  # type: ignore[return-value]

    def get_or_null(self) -> Optional[T]:
        return self._value

    def get_or_else(self, default: U) -> T | U:
        return self._value if self._defined else default  # type: ignore[return-value]

    def get_or_else_get(self, supplier: Callable[[], U]) -> T | U:
        return self._value if self._defined else supplier()  # type: ignore[return-value]

    def get_or_else_throw(self, thrower: Callable[[], BaseException]) -> T:
        if not self._defined:
            raise thrower()
        return self._value  # type: ignore[return-value]

    def if_present(self, effect: Callable[[T], Any]) -> "FOption[T]":
        if self._defined:
            effect(self._value)  # type: ignore[arg-type]
        return self

    def if_absent(self, action: Callable[[], Any]) -> "FOption[T]":
        # Runs whether or not a value is present.
        action()
        return self

    def filter(self, pred: Callable[[T], bool]) -> "FOption[T]":
        if not self._defined:
            return self
        return self if pred(self._value) else EMPTY  # type: ignore[arg-type,return-value]

    def test(self, pred: Callable[[T], bool]) -> bool:
        return self._defined and bool(pred(self._value))  # type: ignore[arg-type]

    def map(self, mapper: Callable[[T], U]) -> "FOption[U]":
        return FOption.of(mapper(self._value)) if self._defined else EMPTY  # type: ignore[arg-type,return-value]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FOption):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value) if self._defined else 0

    def __repr__(self) -> str:
        return f"FOption({self._value!r})" if self._defined else "FOption.empty"


EMPTY: FOption[Any] = FOption(None, False)
