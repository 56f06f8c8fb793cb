"""Tests for the plain sources and the contract checker."""

from collections.abc import Callable

import more_itertools as mit
import pytest

import spliterators as sp
from spliterators import Characteristics as C


def test_list_source_advances_in_order() -> None:
    """Elements are delivered once each, in order."""
    src = sp.ListSource([1, 2, 3])
    seen: list[int] = []
    assert src.try_advance(seen.append) is True
    src.for_each_remaining(seen.append)
    assert seen == [1, 2, 3]
    assert src.try_advance(seen.append) is False
    assert src.estimate_size().unwrap() == 0


def test_list_source_split_halves() -> None:
    """Splitting hands the first half to a new source; both halves cover the original."""
    src = sp.ListSource(list(range(10)))
    src.next()
    prefix = src.try_split().unwrap()
    assert prefix.estimate_size().unwrap() == 4
    assert src.estimate_size().unwrap() == 5
    assert prefix.collect() + src.collect() == list(range(1, 10))


def test_list_source_split_recursively() -> None:
    """Splitting until nothing is left covers every element exactly once."""
    pending: list[sp.Source[int]] = [sp.ListSource(range(37))]
    leaves: list[sp.Source[int]] = []
    while pending:
        current = pending.pop()
        match current.try_split():
            case sp.Some(prefix):
                pending.extend((current, prefix))
            case _:
                leaves.append(current)
    assert sorted(mit.flatten(leaf.collect() for leaf in leaves)) == list(range(37))


def test_list_source_cannot_split_single_element() -> None:
    """A single remaining element cannot be split."""
    src = sp.ListSource(["a"])
    assert src.try_split().is_none()
    assert src.collect() == ["a"]


def test_list_source_characteristics() -> None:
    """A ListSource is ordered and sized; extra flags are added on top."""
    assert sp.ListSource([]).has_characteristics(C.ORDERED | C.SIZED | C.SUBSIZED)
    assert sp.ListSource([], C.NONNULL).has_characteristics(C.NONNULL)
    assert not sp.ListSource([]).has_characteristics(C.SORTED)


def test_iter_source_over_generator() -> None:
    """An unsized iterable has an unknown size and is only ORDERED."""
    src = sp.IterSource(x for x in range(3))
    assert src.estimate_size().is_none()
    assert src.characteristics() == C.ORDERED
    assert list(src) == [0, 1, 2]


def test_iter_source_over_collection() -> None:
    """A sized iterable tracks its remaining size."""
    src = sp.IterSource({"a": 1, "b": 2, "c": 3})
    assert src.has_characteristics(C.SIZED)
    assert src.estimate_size().unwrap() == 3
    assert src.next().unwrap() == "a"
    assert src.estimate_size().unwrap() == 2


def test_iter_source_split_in_batches() -> None:
    """Splitting copies growing batches into sized sources."""
    sp.set_config(batch_unit=2)
    src = sp.IterSource(iter(range(10)))
    first = src.try_split().unwrap()
    second = src.try_split().unwrap()
    assert first.has_characteristics(C.SIZED)
    assert first.collect() == [0, 1]
    assert second.collect() == [2, 3, 4, 5]
    assert src.collect() == [6, 7, 8, 9]
    assert src.try_split().is_none()


def test_iter_source_split_respects_max_batch() -> None:
    """A batch never exceeds the configured maximum."""
    sp.set_config(batch_unit=4, max_batch=3)
    src = sp.IterSource(range(10))
    assert src.try_split().unwrap().collect() == [0, 1, 2]
    assert src.estimate_size().unwrap() == 7


def test_next_and_iteration() -> None:
    """`next()` wraps elements in an Option, and sources are iterable."""
    src = sp.source(["x", "y"])
    assert src.next() == sp.Some("x")
    assert [*src] == ["y"]
    assert src.next() is sp.NONE


def test_source_passes_sources_through() -> None:
    """`source()` returns an existing source unchanged."""
    src = sp.ListSource([1])
    assert sp.source(src) is src


def test_sources_work_with_builtins() -> None:
    """Sources can be passed to anything that accepts an iterable."""
    assert sorted(sp.ListSource([3, 1, 2])) == [1, 2, 3]
    assert sum(sp.source(range(5))) == 10


class TestCheckedSource:
    """Detection of misuse of the advancement protocol."""

    def test_passes_through(self) -> None:
        """A well-behaved consumer sees the same elements."""
        checked = sp.CheckedSource(sp.ListSource([1, 2, 3]))
        assert checked.estimate_size().unwrap() == 3
        assert checked.characteristics() == sp.ListSource([]).characteristics()
        assert checked.collect() == [1, 2, 3]

    def test_advance_after_exhaustion(self) -> None:
        """Advancing after False is a contract violation."""
        checked = sp.CheckedSource(sp.ListSource([]))
        assert checked.try_advance(print) is False
        with pytest.raises(sp.ContractViolationError):
            checked.try_advance(print)

    @pytest.mark.parametrize(
        "drain",
        [sp.Source.collect, sp.Source.count, list, lambda s: s.for_each_remaining(print)],
    )
    def test_drain_after_exhaustion(self, drain: Callable[[sp.Source[int]], object]) -> None:
        """Draining an exhausted source is a contract violation, like advancing it."""
        checked = sp.CheckedSource(sp.ListSource([1]))
        assert checked.collect() == [1]
        with pytest.raises(sp.ContractViolationError):
            drain(checked)

    def test_reentrant_advance(self) -> None:
        """Advancing from inside the visitor is a contract violation."""
        checked = sp.CheckedSource(sp.ListSource([1, 2]))
        with pytest.raises(sp.ContractViolationError):
            checked.try_advance(lambda _: checked.try_advance(print))

    def test_split_is_checked(self) -> None:
        """The split-off part is guarded too."""
        checked = sp.CheckedSource(sp.ListSource([1, 2, 3, 4]))
        prefix = checked.try_split().unwrap()
        assert isinstance(prefix, sp.CheckedSource)
        assert prefix.collect() == [1, 2]
        with pytest.raises(sp.ContractViolationError):
            prefix.try_advance(print)

    def test_checked_by_config(self) -> None:
        """Entry functions wrap their result when contract checks are enabled."""
        sp.set_config(check_contracts=True)
        zipped = sp.zip([1], [2], max)
        grouped = sp.group(["o"], lambda s: s == "o")
        assert isinstance(zipped, sp.CheckedSource)
        assert isinstance(grouped, sp.CheckedSource)
        assert zipped.collect() == [2]
        assert grouped.count() == 1


def test_option() -> None:
    """Option helpers used by the splitting protocol."""
    assert sp.Some(2).zip_with(sp.Some(5), min) == sp.Some(2)
    assert sp.NONE.zip_with(sp.Some(5), min).is_none()
    assert sp.NONE.unwrap_or(7) == 7
    with pytest.raises(sp.OptionUnwrapError, match="no size"):
        sp.NONE.expect("no size")
