"""
Formatting primitive tests

The primitives work on plain values, independent of parsing and cursors.
"""

import pytest

from clformat.lib.argument import Argument
from clformat.lib.primitives import (
    decimal_format,
    digits_group,
    fixed_format,
    float_shortest,
    human_format,
    justify,
    machine_format,
    string_pad,
)


class TestTextForms:
    """Test human and machine forms"""

    def test_human_string(self):
        assert human_format(Argument("hi")) == "hi"

    def test_machine_string(self):
        assert machine_format(Argument("hi")) == '"hi"'

    def test_none(self):
        assert human_format(Argument(None)) == "None"

    def test_mapping(self):
        assert human_format(Argument({"a": 1})) == "{a: 1}"
        assert machine_format(Argument({"a": 1})) == '{"a": 1}'


class TestStringPad:
    """Test the ~A / ~S padding rule"""

    def test_no_padding_needed(self):
        assert string_pad("abc", 2) == "abc"

    def test_right_pad(self):
        assert string_pad("ab", 5) == "ab   "

    def test_left_pad(self):
        assert string_pad("ab", 5, left=True) == "   ab"

    def test_colinc_blocks(self):
        assert string_pad("ab", 5, colinc=4) == "ab    "

    def test_minpad_always_added(self):
        assert string_pad("abcdef", 2, minpad=1, padchar="-") == "abcdef-"


class TestDigitsGroup:
    """Test digit grouping"""

    def test_commas(self):
        assert digits_group("4200") == "4,200"
        assert digits_group("4200000") == "4,200,000"

    def test_short_number(self):
        assert digits_group("42") == "42"

    def test_exact_multiple(self):
        assert digits_group("420000") == "420,000"

    def test_alternative_separators(self):
        assert digits_group("42000", "_", 2) == "4_20_00"
        assert digits_group("4200000", "_", 4) == "420_0000"


class TestDecimalFormat:
    """Test integer rendering"""

    def test_plain(self):
        assert decimal_format(420) == "420"

    def test_commas(self):
        assert decimal_format(4200, commas=True) == "4,200"
        assert decimal_format(-4200000, commas=True) == "-4,200,000"

    def test_mincol_smaller_than_number(self):
        assert decimal_format(420, 2) == "420"

    def test_pads(self):
        assert decimal_format(420, 5) == "  420"
        assert decimal_format(-420, 5) == " -420"

    def test_padchar_with_commas(self):
        assert decimal_format(420, 8, "-", commas=True) == "-----420"
        assert decimal_format(4200, 8, "-", commas=True) == "---4,200"

    def test_sign(self):
        assert decimal_format(420, 2, sign=True) == "+420"
        assert decimal_format(-420, sign=False) == "-420"
        assert decimal_format(-420, sign=True) == "-420"
        assert decimal_format(0, sign=True) == "+0"

    def test_commas_counted_in_width(self):
        """Separators count toward mincol"""
        assert decimal_format(1234, 6, commas=True) == " 1,234"


class TestFloatShortest:
    """Test the shortest fixed notation"""

    def test_simple(self):
        assert float_shortest(2.5) == "2.5"
        assert float_shortest(3.0) == "3.0"

    def test_large(self):
        assert float_shortest(1e20) == "100000000000000000000.0"

    def test_small(self):
        assert float_shortest(1e-05) == "0.00001"


class TestFixedFormat:
    """Test fixed-point rendering"""

    def test_shortest(self):
        assert fixed_format(0.1) == "0.1"

    def test_digits(self):
        assert fixed_format(3.14159, digits=2) == "3.14"
        assert fixed_format(2.0, digits=0) == "2."

    def test_width(self):
        assert fixed_format(3.14159, 8, 3) == "   3.142"

    def test_leading_zero_dropped_to_fit(self):
        assert fixed_format(0.5, 3, 2) == ".50"

    def test_too_wide_without_overflowchar(self):
        assert fixed_format(1234.5, 4, 1) == "1234.5"

    def test_overflowchar(self):
        assert fixed_format(1234.5, 4, 1, overflowchar="x") == "xxxx"

    def test_scale(self):
        assert fixed_format(1.5, digits=1, scale=2) == "150.0"
        assert fixed_format(150.0, digits=1, scale=-2) == "1.5"

    def test_padchar(self):
        assert fixed_format(1.5, 6, 2, padchar="0") == "001.50"

    def test_sign(self):
        assert fixed_format(1.5, digits=1, sign=True) == "+1.5"
        assert fixed_format(-1.5, digits=1, sign=True) == "-1.5"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_not_finite(self, value):
        with pytest.raises(ValueError):
            fixed_format(value)

    def test_width_without_digits(self):
        with pytest.raises(ValueError):
            fixed_format(1.0, width=5)

    def test_scale_overflows_integer_conversion(self):
        with pytest.raises(ValueError):
            fixed_format(1.0, digits=2, scale=400)

    def test_scale_overflows_to_infinity(self):
        """A finite value scaled past the float range is rejected too"""
        with pytest.raises(ValueError):
            fixed_format(1e300, digits=2, scale=10)


class TestJustify:
    """Test segment justification"""

    def test_single_segment_right_justified(self):
        assert justify(["foo"], 10) == "       foo"

    def test_two_segments(self):
        assert justify(["foo", "bar"], 10) == "foo    bar"

    def test_centered(self):
        assert justify(["foo"], 10, pad_before=True, pad_after=True) == "   foo    "

    def test_no_segments(self):
        assert justify([], 4) == "    "

    def test_colinc(self):
        """Width grows from mincol in steps of colinc"""
        assert justify(["abc", "def"], 2, colinc=4) == "abcdef"
        assert justify(["abcd", "ef"], 5, colinc=3) == "abcd  ef"

    def test_minpad(self):
        assert justify(["a", "b"], 0, minpad=2) == "a  b"

    def test_padchar(self):
        assert justify(["a", "b"], 5, padchar=".") == "a...b"
