"""
Custom Pygments lexer for format templates

Provides syntax highlighting for ~directive markup, used by the command
line front end (--highlight) to echo a template before rendering it.

Token types:
- Punctuation: The ~ marker
- Number: Parameter lists (5,'0 / v / #)
- Name.Decorator: Modifiers (: and @)
- Name.Function: Printing and numeric directives (A S D F)
- Keyword: Construct brackets and escapes ({ } < > ; ^)
- String.Escape: Control directives (* % ~)
- Comment: ~<newline> with the whitespace it swallows
- Error: Unknown directives
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Comment,
    Number,
    Error,
)

# One parameter slot: signed integer, 'c (any character, newline included), v or #
PARAMS = r"((?:[+-]?\d+|'[\s\S]|[vV#])?(?:,(?:[+-]?\d+|'[\s\S]|[vV#])?)*)"
MODIFIERS = r"([:@]*)"


class TemplateLexer(RegexLexer):
    """
    Lexer for Common Lisp style format templates

    Example:
        Total: ~{~5,'0D~^, ~}~%

    Tokens:
        Total:  → Text
        ~ { ~}  → Punctuation / Keyword
        5,'0    → Number
        D       → Name.Function
        %       → String.Escape
    """

    name = 'CL Format'
    aliases = ['clformat', 'cl-format']
    filenames = ['*.clf']

    tokens = {
        'root': [
            # ~<newline> and the indentation it consumes
            (r'(~)' + MODIFIERS + r'(\n[ \t]*)', bygroups(Punctuation, Name.Decorator, Comment)),

            # Construct brackets, clause separator and escape
            (r'(~)' + PARAMS + MODIFIERS + r'([{}<>;^])',
             bygroups(Punctuation, Number, Name.Decorator, Keyword)),

            # Printing and numeric directives
            (r'(~)' + PARAMS + MODIFIERS + r'([aAsSdDfF])',
             bygroups(Punctuation, Number, Name.Decorator, Name.Function)),

            # Control directives
            (r'(~)' + PARAMS + MODIFIERS + r'([*%~])',
             bygroups(Punctuation, Number, Name.Decorator, String.Escape)),

            # Anything else after a marker is not a directive
            (r'~.?', Error),

            # Literal text
            (r'[^~]+', Text),
        ],
    }


def get_lexer() -> TemplateLexer:
    """
    Get the TemplateLexer instance

    Returns:
        TemplateLexer instance ready for use with Pygments
    """
    return TemplateLexer()
