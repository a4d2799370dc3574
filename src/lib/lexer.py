"""
Custom Pygments lexer for ovus template highlighting

Highlights directive comments inside HTML template text, so a template
can be reviewed with its directives standing out from ordinary comments.

Token types:
- Comment.Preproc: Directive comment delimiters (<!-- and -->)
- Punctuation: The @ sigil
- Name.Tag: Template names (e.g., @button)
- Name.Attribute: Property names (e.g., class)
- String: Quoted property values
- Comment.Multiline: Ordinary HTML comments
- Error: Anything a directive comment cannot contain
"""

import re

from pygments import highlight
from pygments.formatters import HtmlFormatter, TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Operator,
    Comment,
    Error,
)

from ..config import appsettings


NAME_PATTERN = r'[a-zA-Z][\w:.\-]*'


class OvusLexer(RegexLexer):
    """
    Lexer for HTML templates carrying ovus directive comments

    Example:
        <div><!-- @button class="big" --></div>

    Tokens:
        <div> → Name.Builtin
        <!-- → Comment.Preproc
        @ → Punctuation
        button → Name.Tag
        class → Name.Attribute
        "big" → String.Double
        --> → Comment.Preproc
    """

    name = 'Ovus'
    aliases = ['ovus']
    filenames = ['*.ovus.html']
    flags = re.DOTALL

    tokens = {
        'root': [
            # Directive comment opening with template name
            (r'(<!--)(\s*)(@)(' + NAME_PATTERN + r')',
             bygroups(Comment.Preproc, Text, Punctuation, Name.Tag), 'directive'),

            # Ordinary HTML comments
            (r'<!--.*?-->', Comment.Multiline),

            # HTML tags (pass through as-is)
            (r'<[^>]+>', Name.Builtin),

            # Everything else is text
            (r'[^<]+', Text),
            (r'.', Text),
        ],

        'directive': [
            (r'\s+', Text),

            # Closing delimiter (pop back to HTML)
            (r'-->', Comment.Preproc, '#pop'),

            # Property name and =
            (r'(' + NAME_PATTERN + r')(\s*)(=)(\s*)',
             bygroups(Name.Attribute, Text, Operator, Text)),

            # Quoted values with backslash escapes
            (r'"(\\.|[^"\\])*"', String.Double),
            (r"'(\\.|[^'\\])*'", String.Single),

            # Anything else is a malformed directive
            (r'.', Error),
        ],
    }


def get_lexer() -> OvusLexer:
    """
    Get the OvusLexer instance

    Returns:
        OvusLexer instance ready for use with Pygments
    """
    return OvusLexer()


def source_highlight(text: str, output: str = "html", title: str = "") -> str:
    """
    Highlight template text

    Args:
        text: Template source
        output: "html" for a standalone HTML page, "terminal" for ANSI text
        title: Page title for HTML output

    Returns:
        Highlighted text
    """
    if output == "terminal":
        formatter = TerminalFormatter()
    elif output == "html":
        formatter = HtmlFormatter(full=True, style=appsettings.highlight_style, title=title)
    else:
        raise ValueError(f"Unknown highlight output: {output}")

    return highlight(text, get_lexer(), formatter)
