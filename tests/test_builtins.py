"""Tests for built-in constraint functions."""

from decimal import Decimal

from tagcheck.builtins import BUILTIN_CONSTRAINTS, length, max_, min_, nonnil, nonzero, regex
from tagcheck.types import ErrorKind


def kind_of(result):
    return result.kind if result is not None else None


class TestNonzero:
    def test_zero_values_fail(self):
        zero_values = [None, 0, 0.0, Decimal("0"), False, "", b"", [], (), {}, set()]
        for value in zero_values:
            assert kind_of(nonzero(value, "")) == ErrorKind.ZERO_VALUE, f"{value!r} should be zero"

    def test_non_zero_values_pass(self):
        values = [1, -1, 12.34, Decimal("0.1"), True, "a", b"x", [0], (0,), {"k": 0}, {0}]
        for value in values:
            assert nonzero(value, "") is None, f"{value!r} should not be zero"

    def test_objects_are_never_zero(self):
        class Plain:
            pass

        assert nonzero(Plain(), "") is None
        assert nonzero(lambda: None, "") is None


class TestNonnil:
    def test_none_fails(self):
        assert kind_of(nonnil(None, "")) == ErrorKind.ZERO_VALUE

    def test_zero_but_present_passes(self):
        for value in (0, "", [], False):
            assert nonnil(value, "") is None

    def test_never_unsupported(self):
        for value in (3, 2.5, object(), Decimal("0")):
            assert nonnil(value, "") is None, f"{value!r}"


class TestLength:
    def test_sized_values(self):
        assert length("test1234", "8") is None
        assert kind_of(length("test1234", "0")) == ErrorKind.LEN
        assert length([1, 2, 3], "3") is None
        assert kind_of(length({"a": 1}, "2")) == ErrorKind.LEN
        assert length(b"", "0") is None

    def test_counts_characters_not_bytes(self):
        assert length("héllo", "5") is None

    def test_bad_parameter(self):
        for param in ("", "=", "foo", "1.5"):
            assert kind_of(length("abc", param)) == ErrorKind.BAD_PARAMETER, param

    def test_unsupported_shapes(self):
        for value in (3, 2.5, True, object()):
            assert kind_of(length(value, "1")) == ErrorKind.UNSUPPORTED, f"{value!r}"

    def test_none_passes(self):
        assert length(None, "3") is None


class TestMinMax:
    def test_numeric_bounds(self):
        assert min_(123, "1") is None
        assert kind_of(min_(123, "124")) == ErrorKind.MIN
        assert kind_of(max_(123, "122")) == ErrorKind.MAX
        assert kind_of(max_(123, "10")) == ErrorKind.MAX
        assert min_(10, "10") is None
        assert max_(10, "10") is None

    def test_float_bounds(self):
        assert kind_of(min_(0.5, "1")) == ErrorKind.MIN
        assert max_(0.5, "0.75") is None

    def test_decimal_bounds(self):
        assert kind_of(min_(Decimal("9.99"), "10")) == ErrorKind.MIN
        assert max_(Decimal("9.99"), "10.00") is None
        assert kind_of(max_(Decimal("1"), "abc")) == ErrorKind.BAD_PARAMETER

    def test_integer_literal_forms(self):
        assert kind_of(min_(15, "0x10")) == ErrorKind.MIN
        assert max_(-3, "-2") is None

    def test_leading_zero_is_octal(self):
        assert min_(8, "010") is None
        assert kind_of(min_(5, "010")) == ErrorKind.MIN
        assert kind_of(max_("abcdefghi", "010")) == ErrorKind.MAX
        assert max_(-8, "-010") is None
        assert kind_of(min_(5, "09")) == ErrorKind.BAD_PARAMETER

    def test_length_bounds_for_sized(self):
        assert kind_of(min_("abc", "6")) == ErrorKind.MIN
        assert kind_of(max_("abcdef", "4")) == ErrorKind.MAX
        assert kind_of(min_({}, "1")) == ErrorKind.MIN
        assert kind_of(max_({"A": "a", "B": "a"}, "1")) == ErrorKind.MAX
        assert min_(list(range(10)), "10") is None

    def test_length_not_lexical(self):
        # "b" > "a" lexically but is 1 character long
        assert kind_of(min_("b", "2")) == ErrorKind.MIN

    def test_bad_parameter(self):
        for param in ("", "foo", "=", "1.5"):
            assert kind_of(min_("abc", param)) == ErrorKind.BAD_PARAMETER, param
            assert kind_of(max_(3, param)) == ErrorKind.BAD_PARAMETER, param

    def test_bool_is_unsupported(self):
        assert kind_of(min_(True, "0")) == ErrorKind.UNSUPPORTED

    def test_unsupported_shape(self):
        assert kind_of(max_(object(), "1")) == ErrorKind.UNSUPPORTED

    def test_none_passes(self):
        assert min_(None, "12") is None
        assert max_(None, "0") is None


class TestRegex:
    def test_match_is_not_anchored(self):
        assert regex("test1234", "^[tes]{4}.*") is None
        assert regex("xx123xx", "[0-9]+") is None
        assert kind_of(regex("test1234", "^.*[0-9]{5}$")) == ErrorKind.REGEXP

    def test_invalid_pattern(self):
        assert kind_of(regex("abc", "(")) == ErrorKind.BAD_PARAMETER

    def test_non_string_is_unsupported(self):
        for value in (0, 0.0, b"abc", ["a"]):
            assert kind_of(regex(value, ".*")) == ErrorKind.UNSUPPORTED, f"{value!r}"

    def test_str_subclass(self):
        class Code(str):
            pass

        assert regex(Code("123"), "^[0-9]+$") is None
        assert kind_of(regex(Code("abc"), "^[0-9]+$")) == ErrorKind.REGEXP

    def test_none_passes(self):
        assert regex(None, "^a$") is None


class TestBuiltinTable:
    def test_all_builtins_present(self):
        assert sorted(BUILTIN_CONSTRAINTS) == ["len", "max", "min", "nonnil", "nonzero", "regexp"]
