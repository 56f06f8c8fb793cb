from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from ._errors import require, require_callable
from ._results import Option, Some
from ._source import Characteristics, Source

logger = logging.getLogger(__name__)

_STRIPPED = Characteristics.ORDERED | Characteristics.SORTED | Characteristics.DISTINCT


class ZippingSource[A, B, R](Source[R]):
    """Merge two sources element by element with a combining function.

    Both upstreams are advanced in lockstep; the result ends as soon as either of them is exhausted,
    so its length is the length of the shorter one.

    Once the left source is exhausted, the right one is not advanced anymore.
    When the right one runs out first, the element just pulled from the left is discarded.

    The result never reports `ORDERED`, `SORTED` or `DISTINCT`, and never splits.

    Args:
        left (Source[A]): Provides the first argument of **combine**.
        right (Source[B]): Provides the second argument of **combine**.
        combine (Callable[[A, B], R]): Merges one element of each side.

    Raises:
        InvalidArgumentError: If any argument is `None`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> zipped = sp.ZippingSource(
    ...     sp.ListSource(["one", "two", "three", "four"]),
    ...     sp.ListSource([1, 2, 3]),
    ...     lambda s, i: f"{s}-{i}",
    ... )
    >>> zipped.estimate_size()
    Some(value=3)
    >>> zipped.collect()
    ['one-1', 'two-2', 'three-3']

    ```
    """

    __slots__ = ("_combine", "_exhausted", "_left", "_produced", "_right")

    def __init__(
        self,
        left: Source[A],
        right: Source[B],
        combine: Callable[[A, B], R],
    ) -> None:
        self._left = require(left, "left")
        self._right = require(right, "right")
        self._combine = require_callable(combine, "combine")
        self._exhausted = False
        self._produced = 0

    def try_advance(self, visit: Callable[[R], object]) -> bool:
        if self._exhausted:
            return False
        lefts: list[A] = []
        rights: list[B] = []
        if self._left.try_advance(lefts.append) and self._right.try_advance(
            rights.append
        ):
            result = self._combine(lefts[0], rights[0])
            self._produced += 1
            visit(result)
            return True
        self._exhausted = True
        logger.debug("zipping exhausted after %d elements", self._produced)
        return False

    def estimate_size(self) -> Option[int]:
        if self._exhausted:
            return Some(0)
        return self._left.estimate_size().zip_with(self._right.estimate_size(), min)

    def characteristics(self) -> Characteristics:
        both = self._left.characteristics() & self._right.characteristics()
        return both & ~_STRIPPED


@dataclass(slots=True, frozen=True)
class ZipBuilder[A, B, R]:
    """Fluent, immutable builder of `ZippingSource`.

    Every step returns a new builder; `build()` validates that all three components were given.

    Example:
    ```python
    >>> import spliterators as sp
    >>> zipped = (
    ...     sp.ZipBuilder[str, int, str]()
    ...     .with_left(sp.ListSource(["a", "b"]))
    ...     .with_right(sp.ListSource([1, 2, 3]))
    ...     .merged_by(lambda s, i: s * i)
    ...     .build()
    ... )
    >>> zipped.collect()
    ['a', 'bb']
    >>> sp.ZipBuilder().with_left(sp.ListSource([1])).build()
    Traceback (most recent call last):
        ...
    spliterators._errors.InvalidArgumentError: `right` must not be None

    ```
    """

    left: Source[A] | None = None
    right: Source[B] | None = None
    combine: Callable[[A, B], R] | None = None

    def with_left(self, left: Source[A]) -> ZipBuilder[A, B, R]:
        return replace(self, left=left)

    def with_right(self, right: Source[B]) -> ZipBuilder[A, B, R]:
        return replace(self, right=right)

    def merged_by(self, combine: Callable[[A, B], R]) -> ZipBuilder[A, B, R]:
        return replace(self, combine=combine)

    def build(self) -> ZippingSource[A, B, R]:
        """Create the `ZippingSource`.

        Raises:
            InvalidArgumentError: If a component is missing.
        """
        zipped = ZippingSource(
            require(self.left, "left"),
            require(self.right, "right"),
            require(self.combine, "combine"),
        )
        logger.debug(
            "zipping %s with %s",
            type(self.left).__name__,
            type(self.right).__name__,
        )
        return zipped
