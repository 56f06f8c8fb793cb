from __future__ import annotations

from collections.abc import Callable, Iterable

import cytoolz as cz

from ._core import get_config
from ._errors import require, require_callable
from ._grouping import GroupBuilder
from ._source import CheckedSource, IterSource, ListSource, Source
from ._zipping import ZipBuilder

type IntoSource[T] = Source[T] | Iterable[T]
"""Anything the entry functions accept as an upstream: a `Source`, or any Python `Iterable`."""


def _into_source[T](data: IntoSource[T] | None, name: str) -> Source[T]:
    data = require(data, name)
    match data:
        case Source():
            return data
        case _ if cz.itertoolz.isiterable(data):
            return IterSource(data)
        case _:
            msg = f"`{name}` must be a Source or an Iterable, got {type(data).__name__}"
            raise TypeError(msg)


def _checked[T](src: Source[T]) -> Source[T]:
    return CheckedSource(src) if get_config().check_contracts else src


def source[T](data: IntoSource[T]) -> Source[T]:
    """Wrap **data** into a `Source`.

    Sources are returned as is, other iterables are wrapped in an `IterSource`.

    Args:
        data (IntoSource[T]): The elements to produce.

    Returns:
        Source[T]: A source over **data**.

    Raises:
        InvalidArgumentError: If **data** is `None`.
        TypeError: If **data** is neither a `Source` nor an `Iterable`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> src = sp.source(x * 2 for x in range(3))
    >>> src.estimate_size()
    NONE
    >>> src.collect()
    [0, 2, 4]

    ```
    """
    return _checked(_into_source(data, "data"))


def zip[A, B, R](  # noqa: A001
    left: IntoSource[A],
    right: IntoSource[B],
    combine: Callable[[A, B], R],
) -> Source[R]:
    """Merge **left** and **right** element by element with **combine**.

    The result is as long as the shorter input.

    All arguments are validated before any element is pulled.

    Args:
        left (IntoSource[A]): Provides the first argument of **combine**.
        right (IntoSource[B]): Provides the second argument of **combine**.
        combine (Callable[[A, B], R]): Merges one element of each side.

    Returns:
        Source[R]: The zipped source. It never splits, and never reports `ORDERED` or `SORTED`.

    Raises:
        InvalidArgumentError: If any argument is `None`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> sp.zip(["one", "two", "three", "four"], [1, 2, 3], lambda s, i: f"{s}-{i}").collect()
    ['one-1', 'two-2', 'three-3']
    >>> sp.zip([], [], lambda s, i: (s, i)).count()
    0

    ```
    """
    builder = (
        ZipBuilder[A, B, R]()
        .with_left(_into_source(left, "left"))
        .with_right(_into_source(right, "right"))
        .merged_by(require_callable(combine, "combine"))
    )
    return _checked(builder.build())


def group[T](
    data: IntoSource[T],
    open_trigger: Callable[[T], bool],
    include_leading: bool = False,  # noqa: FBT001, FBT002
    *,
    close_trigger: Callable[[T], bool] | None = None,
) -> Source[ListSource[T]]:
    """Partition **data** into contiguous groups, each starting with an element matching **open_trigger**.

    Elements before the first match are dropped, unless **include_leading** is set,
    in which case they form a first group (only if **open_trigger** matches at least once).

    All arguments are validated before any element is pulled.

    Args:
        data (IntoSource[T]): The elements to partition.
        open_trigger (Callable[[T], bool]): Matches the first element of a group.
        include_leading (bool): Emit the elements before the first match as a group.
        close_trigger (Callable[[T], bool] | None): Matches the last element of a group.

    Returns:
        Source[ListSource[T]]: A source of groups. It never splits, and never reports `ORDERED` or `SORTED`.

    Raises:
        InvalidArgumentError: If **data** or **open_trigger** is `None`.

    Example:
    ```python
    >>> import spliterators as sp
    >>> data = ["1", "o", "o", "2", "3", "o", "4", "5", "6", "o", "7", "8", "9"]
    >>> [g.collect() for g in sp.group(data, lambda x: x == "o")]
    [['o'], ['o', '2', '3'], ['o', '4', '5', '6'], ['o', '7', '8', '9']]
    >>> sp.group(["1", "2", "3"], lambda x: x == "o").count()
    0

    ```
    """
    builder = (
        GroupBuilder[T]()
        .over(_into_source(data, "data"))
        .opened_by(require_callable(open_trigger, "open_trigger"))
        .including_leading(include_leading)
    )
    if close_trigger is not None:
        builder = builder.closed_by(close_trigger)
    return _checked(builder.build())
