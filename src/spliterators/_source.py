from __future__ import annotations

import itertools
import operator
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence, Sized
from enum import IntFlag
from typing import Final

import cytoolz as cz
import more_itertools as mit

from ._core import get_config
from ._errors import ContractViolationError, require
from ._results import NONE, Option, Some

_EXHAUSTED: Final = object()


class Characteristics(IntFlag):
    """Structural guarantees a `Source` makes about the elements it produces.

    Bit values are those of the classic splittable-iterator protocol.
    """

    NONE = 0
    DISTINCT = 0x1
    SORTED = 0x4
    ORDERED = 0x10
    SIZED = 0x40
    NONNULL = 0x100
    IMMUTABLE = 0x400
    CONCURRENT = 0x1000
    SUBSIZED = 0x4000


class Source[T](ABC):
    """A lazy, pull-based cursor over a sequence of elements, that may be split for parallel work.

    A `Source` is stateful and single-use: it is owned by exactly one consumer, and only one advance may be in flight at a time.

    Subclasses only have to implement `try_advance()` and `characteristics()`.

    Every `Source` is also a Python `Iterable`, so it can be used directly in a for-loop,
    or be drained with `collect()` and `count()`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> src = sp.ListSource([1, 2, 3])
    >>> src.try_advance(print)
    1
    True
    >>> src.collect()
    [2, 3]
    >>> src.try_advance(print)
    False

    ```
    """

    __slots__ = ()

    @abstractmethod
    def try_advance(self, visit: Callable[[T], object]) -> bool:
        """Produce the next element, if any, and deliver it exactly once to **visit**.

        Must not be called again once it returned `False`.

        Args:
            visit (Callable[[T], object]): Receives the produced element.

        Returns:
            bool: Whether an element was produced.
        """
        ...

    @abstractmethod
    def characteristics(self) -> Characteristics:
        """Report the structural guarantees of this source."""
        ...

    def for_each_remaining(self, visit: Callable[[T], object]) -> None:
        """Deliver every remaining element to **visit**, in source order.

        Args:
            visit (Callable[[T], object]): Receives each remaining element, exactly once.
        """
        while self.try_advance(visit):
            pass

    def try_split(self) -> Option[Source[T]]:
        """Carve off a non-overlapping part of this source as a new, independent `Source`.

        The default implementation never splits.

        Returns:
            Option[Source[T]]: The split-off part, or `NONE` if this source cannot be partitioned.
        """
        return NONE

    def estimate_size(self) -> Option[int]:
        """Estimate the number of remaining elements.

        Returns:
            Option[int]: The estimate, or `NONE` if it is unknown.
        """
        return NONE

    def has_characteristics(self, flags: Characteristics) -> bool:
        """Check that all the given **flags** are reported by `characteristics()`.

        Example:
        ```python
        >>> import spliterators as sp
        >>> src = sp.ListSource([1, 2])
        >>> src.has_characteristics(sp.Characteristics.ORDERED | sp.Characteristics.SIZED)
        True
        >>> src.has_characteristics(sp.Characteristics.SORTED)
        False

        ```
        """
        return (self.characteristics() & flags) == flags

    def next(self) -> Option[T]:
        """Pull a single element.

        Returns:
            Option[T]: `Some` element, or `NONE` once the source is exhausted.

        Example:
        ```python
        >>> import spliterators as sp
        >>> src = sp.ListSource(["a"])
        >>> src.next()
        Some(value='a')
        >>> src.next()
        NONE

        ```
        """
        found: list[T] = []
        if self.try_advance(found.append):
            return Some(found[0])
        return NONE

    def collect(self) -> list[T]:
        """Drain the remaining elements into a `list`.

        This is a terminal operation.
        """
        out: list[T] = []
        self.for_each_remaining(out.append)
        return out

    def count(self) -> int:
        """Drain the remaining elements and return how many there were.

        This is a terminal operation.
        """
        return mit.ilen(self)

    def __iter__(self) -> Iterator[T]:
        found: list[T] = []
        while self.try_advance(found.append):
            yield found.pop()


class ListSource[T](Source[T]):
    """A `Source` over the `[start, stop)` range of a `Sequence`.

    It is forward-only: once an element is consumed it cannot be replayed.

    Splitting hands the first half of the remaining range to a new `ListSource`.

    Args:
        data (Sequence[T]): The backing sequence. It is not copied.
        flags (Characteristics): Extra characteristics to report on top of `ORDERED | SIZED | SUBSIZED`.
        start (int): First index covered.
        stop (int | None): End of the covered range, `len(data)` by default.

    Example:
    ```python
    >>> import spliterators as sp
    >>> src = sp.ListSource(range(6))
    >>> prefix = src.try_split().unwrap()
    >>> prefix.collect(), src.collect()
    ([0, 1, 2], [3, 4, 5])

    ```
    """

    __slots__ = ("_data", "_flags", "_index", "_stop")

    def __init__(
        self,
        data: Sequence[T],
        flags: Characteristics = Characteristics.NONE,
        start: int = 0,
        stop: int | None = None,
    ) -> None:
        self._data = require(data, "data")
        self._flags = flags | Characteristics.ORDERED | Characteristics.SIZED | Characteristics.SUBSIZED
        self._index = start
        self._stop = len(data) if stop is None else stop

    @staticmethod
    def from_sorted[U](data: Iterable[U]) -> ListSource[U]:
        """Create a `ListSource` over the sorted, de-duplicated elements of **data**.

        Example:
        ```python
        >>> import spliterators as sp
        >>> src = sp.ListSource.from_sorted(["two", "one", "three", "one"])
        >>> src
        ListSource('one', 'three', 'two')
        >>> src.has_characteristics(sp.Characteristics.SORTED | sp.Characteristics.DISTINCT)
        True

        ```
        """
        return ListSource(
            sorted(cz.itertoolz.unique(data)),  # type: ignore[type-var]
            Characteristics.SORTED | Characteristics.DISTINCT,
        )

    def try_advance(self, visit: Callable[[T], object]) -> bool:
        if self._index >= self._stop:
            return False
        item = self._data[self._index]
        self._index += 1
        visit(item)
        return True

    def for_each_remaining(self, visit: Callable[[T], object]) -> None:
        start, self._index = self._index, self._stop
        for item in itertools.islice(self._data, start, self._stop):
            visit(item)

    def try_split(self) -> Option[Source[T]]:
        start = self._index
        mid = (start + self._stop) // 2
        if start >= mid:
            return NONE
        self._index = mid
        return Some(ListSource(self._data, self._flags, start, mid))

    def estimate_size(self) -> Option[int]:
        return Some(max(self._stop - self._index, 0))

    def characteristics(self) -> Characteristics:
        return self._flags

    def __repr__(self) -> str:
        remaining = itertools.islice(self._data, self._index, self._stop)
        return f"{self.__class__.__name__}({', '.join(map(repr, remaining))})"


class IterSource[T](Source[T]):
    """A `Source` over any Python `Iterable`.

    Reports `ORDERED`, and `SIZED` when **data** is a sized collection.

    Splitting copies a batch of elements into a `ListSource`; each successive batch is `Config.batch_unit` elements larger, up to `Config.max_batch`.

    Args:
        data (Iterable[T]): The elements to produce. Only a single pass is made over it.
    """

    __slots__ = ("_batch", "_flags", "_inner", "_remaining")

    def __init__(self, data: Iterable[T]) -> None:
        require(data, "data")
        self._flags = Characteristics.ORDERED
        self._remaining: int | None = None
        if isinstance(data, Sized):
            self._flags |= Characteristics.SIZED
            self._remaining = len(data)
        self._inner = iter(data)
        self._batch = 0

    def try_advance(self, visit: Callable[[T], object]) -> bool:
        item = next(self._inner, _EXHAUSTED)
        if item is _EXHAUSTED:
            if self._remaining is not None:
                self._remaining = 0
            return False
        if self._remaining is not None:
            self._remaining -= 1
        visit(item)  # type: ignore[arg-type]
        return True

    def try_split(self) -> Option[Source[T]]:
        if self._remaining is not None and self._remaining <= 1:
            return NONE
        config = get_config()
        size = min(self._batch + config.batch_unit, config.max_batch)
        if self._remaining is not None:
            size = min(size, self._remaining)
        batch = mit.take(size, self._inner)
        if not batch:
            return NONE
        self._batch = size
        if self._remaining is not None:
            self._remaining -= len(batch)
        return Some(ListSource(batch))

    def estimate_size(self) -> Option[int]:
        if self._remaining is not None:
            return Some(self._remaining)
        hint = operator.length_hint(self._inner, -1)
        return Some(hint) if hint >= 0 else NONE

    def characteristics(self) -> Characteristics:
        return self._flags


class CheckedSource[T](Source[T]):
    """Wrap a `Source`, turning any misuse of the advancement protocol into a `ContractViolationError`.

    Two misuses are detected:

    - calling `try_advance()` again after it returned `False`, which includes draining an exhausted source
      with `for_each_remaining()`, `collect()`, `count()` or a for-loop,
    - calling `try_advance()` while another advance on this source is still in flight (e.g. from inside **visit**).

    Args:
        inner (Source[T]): The source to guard.

    Example:
    ```python
    >>> import spliterators as sp
    >>> src = sp.CheckedSource(sp.ListSource([1]))
    >>> src.collect()
    [1]
    >>> src.try_advance(print)
    Traceback (most recent call last):
        ...
    spliterators._errors.ContractViolationError: try_advance called after it already returned False

    ```
    """

    __slots__ = ("_advancing", "_exhausted", "_inner")

    def __init__(self, inner: Source[T]) -> None:
        self._inner = require(inner, "inner")
        self._exhausted = False
        self._advancing = False

    def try_advance(self, visit: Callable[[T], object]) -> bool:
        if self._exhausted:
            msg = "try_advance called after it already returned False"
            raise ContractViolationError(msg)
        if self._advancing:
            msg = "try_advance re-entered while another advance is in flight"
            raise ContractViolationError(msg)
        self._advancing = True
        try:
            produced = self._inner.try_advance(visit)
        finally:
            self._advancing = False
        if not produced:
            self._exhausted = True
        return produced

    def try_split(self) -> Option[Source[T]]:
        return self._inner.try_split().map(CheckedSource)

    def estimate_size(self) -> Option[int]:
        return self._inner.estimate_size()

    def characteristics(self) -> Characteristics:
        return self._inner.characteristics()
