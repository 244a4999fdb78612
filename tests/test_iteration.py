"""Tests for fallback.iteration module."""

import pytest

from fallback import FallbackIter, FallbackPair
from fallback.errors import CapabilityError


class TestLockstepIteration:
    """Test iteration over the two slots of a pair."""

    def test_resolves_elementwise(self):
        """Shorter primary is padded by the secondary's tail."""
        pair = FallbackPair([3, 2, 1], [1, 1, 4, 5, 1, 4])
        assert [item.fallback() for item in pair] == [3, 2, 1, 5, 1, 4]

    def test_yields_pairs(self):
        """Each item pairs the i-th elements, None past the shorter side."""
        items = list(FallbackPair([1], ["a", "b"]))
        assert items == [FallbackPair(1, "a"), FallbackPair(None, "b")]

    def test_longer_primary(self):
        """Iteration continues to the longer side either way."""
        items = list(FallbackPair("abc", "x"))
        assert items == [
            FallbackPair("a", "x"),
            FallbackPair("b", None),
            FallbackPair("c", None),
        ]

    def test_absent_side_is_empty(self):
        """An absent slot contributes None at every position."""
        assert list(FallbackPair(None, (7, 8))) == [
            FallbackPair(None, 7),
            FallbackPair(None, 8),
        ]

    def test_both_absent_is_empty(self):
        """Two absent slots produce an empty sequence."""
        assert list(FallbackPair(None, None)) == []

    def test_both_empty_is_empty(self):
        """Two empty collections produce an empty sequence."""
        assert list(FallbackPair([], [])) == []

    @pytest.mark.parametrize(
        "primary, secondary",
        [([], [1, 2, 3]), ([1, 2], [1]), (None, [1]), ([1, 2, 3, 4], None)],
    )
    def test_length_is_max(self, primary, secondary):
        """Sequence length is the longer of the two sides."""
        expected = max(len(primary or []), len(secondary or []))
        assert len(list(FallbackPair(primary, secondary))) == expected

    def test_none_elements_are_positions(self):
        """None inside a collection does not end iteration."""
        items = list(FallbackPair([None, None], []))
        assert items == [FallbackPair(None, None), FallbackPair(None, None)]

    def test_dict_iterates_keys(self):
        """Any iterable works, following its own iteration protocol."""
        items = list(FallbackPair({"a": 1}, None))
        assert items == [FallbackPair("a", None)]


class TestFallbackIter:
    """Test FallbackIter behaviour."""

    def test_iter_returns_fallback_iter(self):
        """iter(pair) gives a FallbackIter."""
        assert isinstance(iter(FallbackPair([1], [2])), FallbackIter)

    def test_is_lazy(self):
        """Elements are pulled only as items are requested."""
        pulled = []

        def numbers():
            for i in range(3):
                pulled.append(i)
                yield i

        it = iter(FallbackPair(numbers(), None))
        assert pulled == []
        next(it)
        assert pulled == [0]

    def test_not_restartable(self):
        """The iterator is its own iterator and is consumed once."""
        it = iter(FallbackPair([1, 2], None))
        assert iter(it) is it
        assert len(list(it)) == 2
        assert list(it) == []

    def test_stays_exhausted(self):
        """next() keeps raising StopIteration after the end."""
        it = iter(FallbackPair([1], None))
        next(it)
        with pytest.raises(StopIteration):
            next(it)
        with pytest.raises(StopIteration):
            next(it)

    def test_exhausted_side_is_fused(self):
        """A drained side is never advanced again."""
        calls = []

        class Flaky:
            def __init__(self):
                self.n = 0

            def __iter__(self):
                return self

            def __next__(self):
                calls.append(self.n)
                self.n += 1
                if self.n == 2:
                    raise StopIteration
                return self.n

        items = list(FallbackPair(Flaky(), [10, 20, 30]))
        assert [item.primary for item in items] == [1, None, None]
        assert calls == [0, 1]

    def test_non_iterable_slot(self):
        """A present non-iterable slot fails fast."""
        with pytest.raises(CapabilityError) as exc_info:
            iter(FallbackPair([1], 42))
        assert exc_info.value.context.operation == "iter"
        assert isinstance(exc_info.value.cause, TypeError)
