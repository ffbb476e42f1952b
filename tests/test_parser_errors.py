"""
Parser error tests - malformed templates

Every parse failure raises a ParseError subclass carrying the character
offset of the offending directive and a caret excerpt of the template.
"""

import pytest

from clformat.lib.errors import (
    FormatError,
    MisplacedEscapeError,
    ParseError,
    UnknownDirectiveError,
    UnmatchedDelimiterError,
)
from clformat.lib.parser import Parser


def parse_error(template, error_class):
    """Parse template expecting error_class; return the raised error"""
    with pytest.raises(error_class) as info:
        Parser(template).parse()
    return info.value


class TestUnknownDirectives:
    """Test directive characters that are not registered"""

    def test_unknown_character(self):
        error = parse_error("x~Q", UnknownDirectiveError)
        assert error.position == 1

    @pytest.mark.parametrize("template", ["~R", "~T", "~?", "~(x~)", "~[a~]", "~P", "~X"])
    def test_unsupported_directives(self, template):
        """Directives outside the supported set are rejected, not ignored"""
        error = parse_error(template, UnknownDirectiveError)
        assert error.position == 0

    def test_marker_at_end(self):
        """A lone trailing ~ has no directive character"""
        error = parse_error("abc~", UnknownDirectiveError)
        assert error.position == 3

    def test_parameters_then_end(self):
        error = parse_error("~5,'0:", UnknownDirectiveError)
        assert error.position == 0

    def test_empty_iteration_body(self):
        """~{~} would need an indirect template"""
        error = parse_error("ab~{~}", UnknownDirectiveError)
        assert error.position == 2


class TestUnmatchedDelimiters:
    """Test bracket pairing"""

    def test_unclosed_iteration(self):
        """Error points at the opener that is never closed"""
        error = parse_error("abc ~{~A", UnmatchedDelimiterError)
        assert error.position == 4

    def test_innermost_unclosed_reported(self):
        error = parse_error("~{~<~A", UnmatchedDelimiterError)
        assert error.position == 2

    def test_closer_without_opener(self):
        error = parse_error("~A~}", UnmatchedDelimiterError)
        assert error.position == 2

    def test_justify_closer_without_opener(self):
        error = parse_error("~>", UnmatchedDelimiterError)
        assert error.position == 0

    def test_crossed_brackets(self):
        """~> cannot close ~{"""
        error = parse_error("~{~A~>", UnmatchedDelimiterError)
        assert error.position == 4

    def test_crossed_brackets_reverse(self):
        error = parse_error("~<~A~}", UnmatchedDelimiterError)
        assert error.position == 4

    def test_separator_outside_justify(self):
        error = parse_error("a~;b", UnmatchedDelimiterError)
        assert error.position == 1

    def test_separator_in_iteration_inside_justify(self):
        """~; belongs to the innermost construct, here a ~{"""
        error = parse_error("~<~{~A~;~}~>", UnmatchedDelimiterError)
        assert error.position == 6


class TestMisplacedEscape:
    """Test ~^ outside any construct"""

    def test_escape_at_top_level(self):
        error = parse_error("~^", MisplacedEscapeError)
        assert error.position == 0

    def test_escape_after_directive(self):
        error = parse_error("~A~^", MisplacedEscapeError)
        assert error.position == 2

    def test_escape_after_closed_construct(self):
        error = parse_error("~{~A~}~^", MisplacedEscapeError)
        assert error.position == 6


class TestErrorReporting:
    """Test the information carried by parse errors"""

    def test_hierarchy(self):
        error = parse_error("~Q", UnknownDirectiveError)

        assert isinstance(error, ParseError)
        assert isinstance(error, FormatError)

    def test_message_includes_offset(self):
        error = parse_error("abc ~{~A", UnmatchedDelimiterError)
        assert "offset 4" in str(error)

    def test_caret_under_error(self):
        """Context line shows the template with a caret at the offset"""
        error = parse_error("abc ~{~A", UnmatchedDelimiterError)
        excerpt, caret = error.context.split("\n")

        assert excerpt == "  abc ~{~A"
        assert caret == "      ^"

    def test_template_kept(self):
        error = parse_error("~1,2,3,4,5A", ParseError)
        assert error.template == "~1,2,3,4,5A"

    def test_no_partial_tree(self):
        """A failing parse leaves nothing usable behind"""
        parser = Parser("ok ~A ~Q")
        with pytest.raises(UnknownDirectiveError):
            parser.parse()
