"""Tests for Option type (Some and Nothing)."""

import copy
import math
import pickle

import pytest
from hypothesis import given
from strategies import options, payloads

from carton import Err, Nothing, NothingType, Ok, Some, UnwrapError, from_nullable


class TestSomeCreation:
    """Tests for Some instantiation and basic properties."""

    def test_some_creation(self):
        """Some wraps a value."""
        some = Some(42)
        assert some.value == 42

    def test_some_with_none(self):
        """Some can wrap None (Some(None) is not Nothing)."""
        some = Some(None)
        assert some.value is None
        assert some.is_some()
        assert some != Nothing

    def test_some_with_nan(self):
        """Some(nan) is still Some."""
        some = Some(float('nan'))
        assert some.is_some()
        assert math.isnan(some.unwrap())

    def test_some_is_frozen(self):
        """Some instances are immutable."""
        some = Some(42)
        with pytest.raises(AttributeError):
            some.value = 100  # type: ignore[misc]

    def test_payload_never_decides_variant(self, payload):
        """Falsy and empty payloads stay Some."""
        some = Some(payload)
        assert some.is_some()
        assert not some.is_none()
        assert some.unwrap() is payload


class TestNothingCreation:
    """Tests for Nothing singleton."""

    def test_nothing_is_singleton(self):
        """Nothing is the shared NothingType instance."""
        assert isinstance(Nothing, NothingType)
        assert Nothing.map(lambda x: x) is Nothing

    def test_second_instance_rejected(self):
        """NothingType cannot be constructed again."""
        with pytest.raises(TypeError, match='singleton'):
            NothingType()

    def test_copies_resolve_to_nothing(self):
        assert copy.copy(Nothing) is Nothing
        assert copy.deepcopy(Some(Nothing)).value is Nothing

    def test_pickle_resolves_to_nothing(self):
        assert pickle.loads(pickle.dumps(Nothing)) is Nothing
        assert pickle.loads(pickle.dumps([Nothing, Some(1)])) == [Nothing, Some(1)]

    def test_nothing_is_frozen(self):
        """Nothing is immutable."""
        with pytest.raises(AttributeError):
            Nothing.value = 42  # type: ignore[attr-defined]


class TestOptionQueries:
    """Tests for is_some / is_none / is_some_and / is_none_or."""

    def test_is_some_and(self):
        assert Some(2).is_some_and(lambda x: x > 1)
        assert not Some(0).is_some_and(lambda x: x > 1)

    def test_nothing_is_some_and_skips_predicate(self):
        calls = []
        assert not Nothing.is_some_and(calls.append)
        assert calls == []

    def test_is_none_or(self):
        assert Some(2).is_none_or(lambda x: x > 1)
        assert not Some(0).is_none_or(lambda x: x > 1)

    def test_nothing_is_none_or_skips_predicate(self):
        calls = []
        assert Nothing.is_none_or(calls.append)
        assert calls == []


class TestOptionUnwrap:
    """Tests for unwrap, expect and their fallbacks."""

    def test_some_unwrap(self, sample_some):
        assert sample_some.unwrap() == 'hello'

    def test_nothing_unwrap_raises(self, sample_nothing):
        """Unwrapping Nothing raises with the fixed message."""
        with pytest.raises(UnwrapError, match='Tried to unwrap None'):
            sample_nothing.unwrap()

    def test_unwrap_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            Nothing.unwrap()

    def test_some_expect(self):
        assert Some(1).expect('missing') == 1

    def test_nothing_expect_uses_message(self):
        with pytest.raises(UnwrapError) as exc_info:
            Nothing.expect('user not found')
        assert exc_info.value.message == 'user not found'
        assert str(exc_info.value) == 'user not found'

    def test_unwrap_or(self):
        assert Some(1).unwrap_or(0) == 1
        assert Nothing.unwrap_or(0) == 0

    def test_unwrap_or_else_is_lazy(self):
        """The fallback is only computed for Nothing."""
        calls = []

        def fallback():
            calls.append(True)
            return 0

        assert Some(1).unwrap_or_else(fallback) == 1
        assert calls == []
        assert Nothing.unwrap_or_else(fallback) == 0
        assert calls == [True]


class TestOptionTransform:
    """Tests for map, map_or, map_or_else, filter, inspect."""

    def test_some_map(self):
        assert Some(5).map(lambda x: x * 2) == Some(10)

    def test_some_map_to_none_stays_some(self):
        """Mapping to None produces Some(None), never Nothing."""
        assert Some(5).map(lambda _: None) == Some(None)

    def test_nothing_map_skips_function(self):
        calls = []
        assert Nothing.map(calls.append) is Nothing
        assert calls == []

    def test_map_or(self):
        assert Some(5).map_or(0, lambda x: x + 1) == 6
        assert Nothing.map_or(0, lambda x: x + 1) == 0

    def test_map_or_else(self):
        assert Some(5).map_or_else(lambda: 0, lambda x: x + 1) == 6
        assert Nothing.map_or_else(lambda: -1, lambda x: x + 1) == -1

    def test_filter(self):
        assert Some(4).filter(lambda x: x % 2 == 0) == Some(4)
        assert Some(3).filter(lambda x: x % 2 == 0) is Nothing
        assert Nothing.filter(lambda _: True) is Nothing

    def test_inspect_returns_self(self):
        seen = []
        some = Some(7)
        assert some.inspect(seen.append) is some
        assert seen == [7]

    def test_nothing_inspect_skips_function(self):
        seen = []
        assert Nothing.inspect(seen.append) is Nothing
        assert seen == []


class TestOptionCombinators:
    """Tests for and_, and_then, or_, or_else, zip, flatten."""

    def test_and(self):
        assert Some(1).and_(Some('b')) == Some('b')
        assert Some(1).and_(Nothing) is Nothing
        assert Nothing.and_(Some('b')) is Nothing

    def test_and_then(self):
        def half(x: int):
            return Some(x // 2) if x % 2 == 0 else Nothing

        assert Some(4).and_then(half) == Some(2)
        assert Some(3).and_then(half) is Nothing
        assert Nothing.and_then(half) is Nothing

    def test_and_then_short_circuits(self):
        calls = []
        Nothing.and_then(lambda x: calls.append(x) or Some(x))
        assert calls == []

    def test_or(self):
        some = Some(1)
        assert some.or_(Some(2)) is some
        assert Nothing.or_(Some(2)) == Some(2)
        assert Nothing.or_(Nothing) is Nothing

    def test_or_else(self):
        calls = []
        some = Some(1)
        assert some.or_else(lambda: calls.append(True) or Some(2)) is some
        assert calls == []
        assert Nothing.or_else(lambda: Some(2)) == Some(2)

    def test_zip(self):
        assert Some(1).zip(Some('a')) == Some((1, 'a'))
        assert Some(1).zip(Nothing) is Nothing
        assert Nothing.zip(Some('a')) is Nothing

    def test_flatten(self):
        assert Some(Some(1)).flatten() == Some(1)
        assert Some(Nothing).flatten() is Nothing
        assert Nothing.flatten() is Nothing


class TestOptionConversion:
    """Tests for ok_or, ok_or_else and from_nullable."""

    def test_ok_or(self):
        assert Some(1).ok_or('missing') == Ok(1)
        assert Nothing.ok_or('missing') == Err('missing')

    def test_ok_or_else_is_lazy(self):
        calls = []

        def make_error():
            calls.append(True)
            return 'missing'

        assert Some(1).ok_or_else(make_error) == Ok(1)
        assert calls == []
        assert Nothing.ok_or_else(make_error) == Err('missing')
        assert calls == [True]

    def test_ok_or_keeps_error_identity(self):
        error = ValueError('missing')
        assert Nothing.ok_or(error).unwrap_err() is error

    def test_from_nullable(self):
        assert from_nullable(None) is Nothing
        assert from_nullable(0) == Some(0)
        assert from_nullable('') == Some('')


class TestOptionRendering:
    """Tests for the human-readable str() of Options."""

    @pytest.mark.parametrize(
        ('option', 'expected'),
        [
            (Some(1), 'Some(1)'),
            (Some('raw'), 'Some("raw")'),
            (Some(True), 'Some(True)'),
            (Some(None), 'Some(None)'),
            (Some({'test': True}), 'Some({"test":true})'),
            (Some([1, 2]), 'Some([1, 2])'),
            (Nothing, 'Nothing'),
        ],
    )
    def test_str(self, option, expected):
        assert str(option) == expected

    def test_nothing_repr(self):
        assert repr(Nothing) == 'Nothing'

    def test_object_without_repr_is_rendered(self):
        """Objects msgspec cannot encode fall back to repr."""

        class Opaque:
            pass

        value = Opaque()
        assert str(Some(value)) == f'Some({value!r})'


class TestOptionPatternMatching:
    """Options destructure with match statements."""

    def test_match_some(self):
        match Some(3):
            case Some(value):
                assert value == 3
            case NothingType():
                pytest.fail('expected Some')

    def test_match_nothing(self):
        match Nothing:
            case Some(_):
                pytest.fail('expected Nothing')
            case NothingType():
                pass


@pytest.mark.hypothesis_property
class TestOptionProperties:
    """Property-based laws for Option."""

    @given(value=payloads)
    def test_map_identity(self, value):
        assert Some(value).map(lambda x: x) == Some(value)

    @given(option=options)
    def test_and_then_some_is_identity(self, option):
        assert option.and_then(Some) == option

    @given(option=options, fallback=payloads)
    def test_unwrap_or_matches_variant(self, option, fallback):
        expected = option.value if option.is_some() else fallback
        assert option.unwrap_or(fallback) == expected

    @given(value=payloads)
    def test_ok_or_round_trips_through_ok(self, value):
        assert Some(value).ok_or('e').ok() == Some(value)
