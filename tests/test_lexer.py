"""
Template lexer tests - Pygments token classification
"""

from pygments.token import Comment, Error, Keyword, Name, Number, Punctuation, String, Text

from clformat.lib.lexer import TemplateLexer, get_lexer


def tokens_of(template):
    return list(TemplateLexer(ensurenl=False).get_tokens(template))


class TestTokenClassification:
    """Test the token type of each template element"""

    def test_plain_text(self):
        assert tokens_of("hello") == [(Text, "hello")]

    def test_printing_directive(self):
        assert tokens_of("~A") == [(Punctuation, "~"), (Name.Function, "A")]

    def test_parameters_and_modifiers(self):
        tokens = tokens_of("~10,'_:D")

        assert (Number, "10,'_") in tokens
        assert (Name.Decorator, ":") in tokens
        assert (Name.Function, "D") in tokens

    def test_construct_brackets(self):
        tokens = tokens_of("~{~A~^, ~}")
        keywords = [value for token, value in tokens if token is Keyword]

        assert keywords == ["{", "^", "}"]
        assert (Text, ", ") in tokens

    def test_control_directives(self):
        tokens = tokens_of("~%~~")
        assert [value for token, value in tokens if token is String.Escape] == ["%", "~"]

    def test_tilde_newline(self):
        tokens = tokens_of("a~\n   b")
        assert (Comment, "\n   ") in tokens

    def test_unknown_directive(self):
        assert (Error, "~Q") in tokens_of("x~Qy")

    def test_newline_padchar(self):
        """'<newline> is a character parameter, not ~<newline>"""
        tokens = tokens_of("~5,'\nD")

        assert (Number, "5,'\n") in tokens
        assert (Name.Function, "D") in tokens
        assert not any(token is Comment for token, _ in tokens)


class TestRegistration:
    """Test lexer metadata"""

    def test_get_lexer(self):
        assert isinstance(get_lexer(), TemplateLexer)

    def test_aliases(self):
        assert "clformat" in TemplateLexer.aliases
        assert TemplateLexer.filenames == ["*.clf"]
