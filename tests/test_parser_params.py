"""
Parser parameter tests - parameter lists and their validation

Tests integer, character, v and # parameters, omitted slots, and the
per-directive checks on count, type and range.
"""

import pytest

from clformat.lib.errors import InvalidParameterError
from clformat.lib.parser import Parser
from clformat.models.tree import Param, ParamKind


def params_of(template):
    """Parameter list of the first top-level directive"""
    return Parser(template).parse().items[0].params


class TestParameterTokens:
    """Test the parameter token forms"""

    def test_integer(self):
        assert params_of("~5D") == (Param(ParamKind.INTEGER, 5, 1),)

    def test_signed_integers(self):
        """Leading + and - are part of the number"""
        params = params_of("~,,-1F")
        assert params[2] == Param(ParamKind.INTEGER, -1, 3)

        params = params_of("~+7D")
        assert params[0].value == 7

    def test_character(self):
        """'c is a character parameter"""
        params = params_of("~10,'_:D")

        assert params == (
            Param(ParamKind.INTEGER, 10, 1),
            Param(ParamKind.CHARACTER, "_", 4),
        )

    def test_quoted_comma(self):
        """The character after a quote is taken literally, even a comma"""
        params = params_of("~5,'0,',D")
        assert [param.value for param in params] == [5, "0", ","]

    def test_quoted_newline(self):
        """A quoted newline is a padchar, not ~<newline>"""
        params = params_of("~5,'\nD")
        assert [param.value for param in params] == [5, "\n"]

    def test_omitted_leading(self):
        """~,2F - first slot empty"""
        params = params_of("~,2F")

        assert params[0].kind == ParamKind.OMITTED
        assert params[1] == Param(ParamKind.INTEGER, 2, 2)

    def test_omitted_trailing(self):
        """~5,D - trailing comma leaves an omitted slot"""
        params = params_of("~5,D")
        assert [param.kind for param in params] == [ParamKind.INTEGER, ParamKind.OMITTED]

    def test_next_argument(self):
        """v and V both take the next argument"""
        assert params_of("~vD")[0].kind == ParamKind.NEXT_ARGUMENT
        assert params_of("~VD")[0].kind == ParamKind.NEXT_ARGUMENT

    def test_remaining(self):
        assert params_of("~#D")[0].kind == ParamKind.REMAINING

    def test_literal_flag(self):
        """Only integer and character parameters are literal"""
        params = params_of("~v,'xD")
        assert [param.literal for param in params] == [False, True]

    def test_no_parameters(self):
        assert params_of("~A") == ()


class TestParameterValidation:
    """Test parameter checks against each directive's signature"""

    def test_too_many_parameters(self):
        """~A takes four parameters; the fifth is reported"""
        with pytest.raises(InvalidParameterError) as info:
            Parser("~1,2,3,4,5A").parse()
        assert info.value.position == 9

    def test_character_where_integer_expected(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~'xD").parse()
        assert info.value.position == 1
        assert "mincol" in info.value.message

    def test_integer_where_character_expected(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~5,6D").parse()
        assert info.value.position == 3
        assert "padchar" in info.value.message

    def test_negative_width(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~-3A").parse()
        assert info.value.position == 1

    def test_colinc_must_be_positive(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~0,0<x~>").parse()
        assert info.value.position == 3

    def test_argument_parameters_not_checked(self):
        """v and # are only checked when rendering"""
        params = params_of("~v,#D")
        assert len(params) == 2

    def test_sign_without_digits(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~+D").parse()
        assert info.value.position == 1

    def test_missing_comma(self):
        """Two parameter tokens in a row"""
        with pytest.raises(InvalidParameterError) as info:
            Parser("~5'xD").parse()
        assert info.value.position == 2

    def test_quote_at_end(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~5,'").parse()
        assert info.value.position == 3


class TestModifierValidation:
    """Test that directives reject modifiers they do not define"""

    def test_colon_on_human_readable(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("x~:A").parse()
        assert info.value.position == 1
        assert "':'" in info.value.message

    def test_at_on_newline(self):
        with pytest.raises(InvalidParameterError):
            Parser("~@%").parse()

    def test_repeated_modifier(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~::D").parse()
        assert info.value.position == 2

    def test_colon_on_separator(self):
        with pytest.raises(InvalidParameterError) as info:
            Parser("~<a~:;b~>").parse()
        assert info.value.position == 3

    def test_colon_escape_outside_sublist_loop(self):
        """~:^ needs a directly enclosing ~:{"""
        with pytest.raises(InvalidParameterError) as info:
            Parser("~{~A~:^~}").parse()
        assert info.value.position == 4
