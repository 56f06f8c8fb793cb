from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from ._errors import require, require_callable
from ._results import Option, Some
from ._source import Characteristics, ListSource, Source

logger = logging.getLogger(__name__)

_STRIPPED = (
    Characteristics.ORDERED
    | Characteristics.SORTED
    | Characteristics.SIZED
    | Characteristics.SUBSIZED
    | Characteristics.DISTINCT
)


class GroupingSource[T](Source[ListSource[T]]):
    """Partition a source into contiguous groups, each starting with an element matching **open_trigger**.

    A group ends right before the next element matching **open_trigger**, right after an element matching **close_trigger**,
    or when the upstream source is exhausted.

    Elements outside of any group are dropped: those before the first match of **open_trigger**,
    and those between a match of **close_trigger** and the next match of **open_trigger**.
    An element matching both triggers opens a new group.

    With **include_leading**, the elements before the first match of **open_trigger** are emitted as a first group instead,
    provided **open_trigger** matches at least once.

    Each group is handed out as a fresh `ListSource` owning its elements.
    The result never reports `ORDERED`, `SORTED` or `SIZED`, and never splits.

    Args:
        upstream (Source[T]): The source to partition.
        open_trigger (Callable[[T], bool]): Matches the first element of a group.
        close_trigger (Callable[[T], bool] | None): Matches the last element of a group.
        include_leading (bool): Emit the elements before the first opening match as a group.

    Raises:
        InvalidArgumentError: If **upstream** or **open_trigger** is `None`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> data = ["1", "o", "2", "3", "o", "4", "c", "5", "o", "6"]
    >>> grouper = sp.GroupingSource(
    ...     sp.ListSource(data),
    ...     lambda x: x == "o",
    ...     close_trigger=lambda x: x == "c",
    ... )
    >>> [group.collect() for group in grouper]
    [['o', '2', '3'], ['o', '4', 'c'], ['o', '6']]

    ```
    """

    __slots__ = (
        "_buffer",
        "_close_trigger",
        "_emitted",
        "_exhausted",
        "_include_leading",
        "_inside",
        "_open_trigger",
        "_opened",
        "_upstream",
    )

    def __init__(
        self,
        upstream: Source[T],
        open_trigger: Callable[[T], bool],
        close_trigger: Callable[[T], bool] | None = None,
        *,
        include_leading: bool = False,
    ) -> None:
        self._upstream = require(upstream, "upstream")
        self._open_trigger = require_callable(open_trigger, "open_trigger")
        if close_trigger is not None:
            require_callable(close_trigger, "close_trigger")
        self._close_trigger = close_trigger
        self._include_leading = include_leading
        self._buffer: list[T] = []
        self._inside = False
        self._opened = False
        self._exhausted = False
        self._emitted = 0

    def try_advance(self, visit: Callable[[ListSource[T]], object]) -> bool:
        if self._exhausted:
            return False
        pulled: list[T] = []
        while self._upstream.try_advance(pulled.append):
            item = pulled.pop()
            if self._open_trigger(item):
                self._opened = True
                self._inside = True
                if self._buffer:
                    group = self._hand_off()
                    self._buffer.append(item)
                    visit(group)
                    return True
                self._buffer.append(item)
            elif self._inside:
                self._buffer.append(item)
                if self._close_trigger is not None and self._close_trigger(item):
                    self._inside = False
                    visit(self._hand_off())
                    return True
            elif self._include_leading and not self._opened:
                self._buffer.append(item)
        self._exhausted = True
        if self._buffer and self._opened:
            group = self._hand_off()
            logger.debug("grouping exhausted after %d groups", self._emitted)
            visit(group)
            return True
        self._buffer = []
        logger.debug("grouping exhausted after %d groups", self._emitted)
        return False

    def _hand_off(self) -> ListSource[T]:
        group, self._buffer = self._buffer, []
        self._emitted += 1
        return ListSource(group)

    def estimate_size(self) -> Option[int]:
        if self._exhausted:
            return Some(0)
        return self._upstream.estimate_size()

    def characteristics(self) -> Characteristics:
        return (self._upstream.characteristics() & ~_STRIPPED) | Characteristics.NONNULL


@dataclass(slots=True, frozen=True)
class GroupBuilder[T]:
    """Fluent, immutable builder of `GroupingSource`.

    `over()` and `opened_by()` are required; `closed_by()` and `including_leading()` are optional.

    Example:
    ```python
    >>> import spliterators as sp
    >>> grouper = (
    ...     sp.GroupBuilder[int]()
    ...     .over(sp.ListSource([7, 0, 1, 2, 0, 3]))
    ...     .opened_by(lambda x: x == 0)
    ...     .including_leading()
    ...     .build()
    ... )
    >>> [group.collect() for group in grouper]
    [[7], [0, 1, 2], [0, 3]]

    ```
    """

    upstream: Source[T] | None = None
    open_trigger: Callable[[T], bool] | None = None
    close_trigger: Callable[[T], bool] | None = None
    include_leading: bool = False

    def over(self, upstream: Source[T]) -> GroupBuilder[T]:
        return replace(self, upstream=upstream)

    def opened_by(self, open_trigger: Callable[[T], bool]) -> GroupBuilder[T]:
        return replace(self, open_trigger=open_trigger)

    def closed_by(self, close_trigger: Callable[[T], bool]) -> GroupBuilder[T]:
        return replace(self, close_trigger=require(close_trigger, "close_trigger"))

    def including_leading(self, include: bool = True) -> GroupBuilder[T]:  # noqa: FBT001, FBT002
        return replace(self, include_leading=include)

    def build(self) -> GroupingSource[T]:
        """Create the `GroupingSource`.

        Raises:
            InvalidArgumentError: If the upstream source or the opening trigger is missing.
        """
        grouper = GroupingSource(
            require(self.upstream, "upstream"),
            require(self.open_trigger, "open_trigger"),
            self.close_trigger,
            include_leading=self.include_leading,
        )
        logger.debug(
            "grouping %s (close trigger: %s, include leading: %s)",
            type(self.upstream).__name__,
            self.close_trigger is not None,
            self.include_leading,
        )
        return grouper
