"""
Basic parser tests - simplest cases

Tests empty templates, literal text and single-step directives.
"""

import pytest

from clformat.lib.parser import Parser, parse
from clformat.models.tree import DirectiveKind, Group, Literal, Modifiers, Simple


class TestEmptyAndLiteral:
    """Test empty templates and plain text"""

    def test_empty_template(self):
        """Empty string should parse to an empty group"""
        parser = Parser("")
        tree = parser.parse()
        assert tree == Group(())
        assert len(tree) == 0

    def test_plain_text(self):
        """Text without directives is one literal"""
        tree = Parser("Hello world").parse()

        assert tree.items == (Literal("Hello world", 0),)

    def test_multiline_text(self):
        """Newlines in literal text are kept"""
        tree = Parser("Line 1\nLine 2").parse()

        assert tree.items == (Literal("Line 1\nLine 2", 0),)


class TestSimpleDirectives:
    """Test single-step directives and their positions"""

    def test_directive_between_literals(self):
        """Literal runs are split around a directive"""
        tree = Parser("Hello, ~A!").parse()

        assert tree.items == (
            Literal("Hello, ", 0),
            Simple(DirectiveKind.HUMAN_READABLE, position=7),
            Literal("!", 9),
        )

    def test_several_directives(self):
        """Mixed template with ~A, ~D and ~%"""
        tree = Parser("Hello, ~A! Value: ~D~%").parse()

        kinds = [type(node).__name__ for node in tree]
        assert kinds == ["Literal", "Simple", "Literal", "Simple", "Simple"]
        assert tree.items[1].kind == DirectiveKind.HUMAN_READABLE
        assert tree.items[2].text == "! Value: "
        assert tree.items[3].kind == DirectiveKind.DECIMAL
        assert tree.items[4].kind == DirectiveKind.NEWLINE

    @pytest.mark.parametrize("char, kind", [
        ("A", DirectiveKind.HUMAN_READABLE),
        ("S", DirectiveKind.MACHINE_READABLE),
        ("D", DirectiveKind.DECIMAL),
        ("F", DirectiveKind.FIXED_FLOAT),
        ("*", DirectiveKind.SKIP),
        ("%", DirectiveKind.NEWLINE),
        ("~", DirectiveKind.TILDE),
    ])
    def test_each_kind(self, char, kind):
        """Every single-step directive character maps to its kind"""
        tree = Parser(f"~{char}").parse()

        assert len(tree) == 1
        assert tree.items[0].kind == kind
        assert tree.items[0].name == f"~{char}"

    def test_lowercase_directive(self):
        """Directive characters are case-insensitive"""
        tree = Parser("~a~s~d~f").parse()

        assert [node.kind for node in tree] == [
            DirectiveKind.HUMAN_READABLE,
            DirectiveKind.MACHINE_READABLE,
            DirectiveKind.DECIMAL,
            DirectiveKind.FIXED_FLOAT,
        ]

    def test_adjacent_directives(self):
        """Directives with no text between them"""
        tree = Parser("~*~A").parse()

        assert tree.items == (
            Simple(DirectiveKind.SKIP, position=0),
            Simple(DirectiveKind.HUMAN_READABLE, position=2),
        )

    def test_parse_helper(self):
        """Module-level parse() matches Parser.parse()"""
        assert parse("x ~A y") == Parser("x ~A y").parse()


class TestModifiers:
    """Test ':' and '@' flags"""

    def test_colon(self):
        tree = Parser("~:D").parse()
        assert tree.items[0].modifiers == Modifiers.COLON

    def test_at(self):
        tree = Parser("~@D").parse()
        assert tree.items[0].modifiers == Modifiers.AT

    def test_both_in_either_order(self):
        """~:@D and ~@:D carry the same flags"""
        first = Parser("~:@D").parse().items[0]
        second = Parser("~@:D").parse().items[0]

        assert first.modifiers == Modifiers.COLON | Modifiers.AT
        assert second.modifiers == first.modifiers


class TestTildeNewline:
    """Test ~<newline> whitespace handling"""

    def test_newline_and_indent_dropped(self):
        """Plain ~<newline> removes the line break and the indentation"""
        tree = Parser("first ~\n      second").parse()
        assert tree.items == (Literal("first second", 0),)

    def test_colon_keeps_indent(self):
        tree = Parser("a~:\n   b").parse()
        assert tree.items == (Literal("a   b", 0),)

    def test_at_keeps_newline(self):
        tree = Parser("a~@\n   b").parse()
        assert tree.items == (Literal("a\nb", 0),)

    def test_next_line_untouched(self):
        """Only whitespace up to the next line break is skipped"""
        tree = Parser("a~\n  \nb").parse()
        assert tree.items == (Literal("a\nb", 0),)
