"""
Transformer from one HTML comment to template directive data

Grammar (names are case-insensitive, see grammar.py):

    comment  := "<!--" WS ( "@" name (WS property)* WS? )? "-->"
    property := name WS? "=" WS? value
    value    := '"' ( "\\" any | [^"\\] )* '"'
              | "'" ( "\\" any | [^'\\] )* "'"

Parsing is a single left-to-right pass with no backtracking:
1. Skip <!-- (error if absent) and whitespace
2. No @ sigil: an ordinary comment, transform() returns None
3. Scan the template name, then properties until --> is reached
4. Require the closing -->

Example:
    >>> transformer = CommentTransformer('<!-- @button class="rounded" -->')
    >>> transformer.transform()
    Directive(name='button', properties=[{'class': 'rounded'}])
    >>> CommentTransformer("<!-- just a comment -->").transform() is None
    True
"""

from typing import NoReturn, Optional, Tuple, Type

from ..models.document import Directive
from .errors import (
    InvalidInputError,
    InvalidNameError,
    MalformedCommentError,
    MissingCloseDelimiterError,
    MissingEqualsError,
    MissingOpenDelimiterError,
    MissingOpenQuoteError,
    NotLoadedError,
    UnterminatedCommentError,
    UnterminatedValueError,
)
from .grammar import name_scan
from .scanner import COMMENT_CLOSE, COMMENT_OPEN


TEMPLATE_SIGIL = "@"
PROPERTY_EQUALS = "="
QUOTES = ('"', "'")
ESCAPE = "\\"


class CommentTransformer:
    """
    Transformer that extracts template data from a directive comment

    Reusable in the same way as CommentScanner: load() swaps in a new
    comment, reset() rewinds over the loaded one. One failure aborts the
    whole transform() call; no partial Directive is kept.
    """

    def __init__(self, comment: Optional[str] = None) -> None:
        """
        Initialize transformer, optionally loading a comment

        Args:
            comment: Full comment text including <!-- and -->

        Raises:
            InvalidInputError: If comment is given and is not a string
        """
        self._text: Optional[str] = None
        self._pos: int = 0
        self._directive: Optional[Directive] = None

        if comment is not None:
            self.load(comment)

    @property
    def text(self) -> Optional[str]:
        """The loaded comment; None if nothing loaded"""
        return self._text

    @property
    def position(self) -> int:
        """Current cursor offset into the comment"""
        return self._pos

    @property
    def directive(self) -> Optional[Directive]:
        """Directive from the last successful transform(); None otherwise"""
        return self._directive

    def load(self, comment: str) -> None:
        """
        Load a comment into the transformer and reset state

        Raises:
            InvalidInputError: If comment is not a string
        """
        if not isinstance(comment, str):
            raise InvalidInputError(
                f"CommentTransformer requires a string when loading, got {type(comment).__name__}."
            )

        self._text = comment
        self.reset()

    def reset(self) -> None:
        """Rewind the cursor and forget the last directive"""
        self._pos = 0
        self._directive = None

    # -- cursor helpers -------------------------------------------------

    def _eos(self) -> bool:
        return self._pos >= len(self._text)

    def _char(self) -> str:
        return self._text[self._pos] if not self._eos() else ""

    def _startsWith(self, token: str) -> bool:
        return self._text.startswith(token, self._pos)

    def error(self, error_class: Type[MalformedCommentError], message: str) -> NoReturn:
        """
        Raise a MalformedCommentError subclass at the current position

        Raises:
            MalformedCommentError: Always
        """
        raise error_class(message, text=self._text, position=self._pos)

    def space_skip(self) -> None:
        """Advance past any whitespace at the cursor"""
        while not self._eos() and self._char().isspace():
            self._pos += 1

    # -- grammar pieces -------------------------------------------------

    def commentOpen_scan(self) -> None:
        """Skip the leading <!--, which must start the text"""
        if not self._text.startswith(COMMENT_OPEN):
            self.error(
                MissingOpenDelimiterError,
                "Template comment needs to start with HTML comment opening (<!--).",
            )
        self._pos = len(COMMENT_OPEN)

    def template_is(self) -> bool:
        """Check for the @ sigil marking a template comment"""
        return self._char() == TEMPLATE_SIGIL

    def name_scan(self, kind: str = "template") -> str:
        """
        Scan a template or property name at the cursor

        Raises:
            InvalidNameError: If no valid name starts at the cursor
        """
        end: int = name_scan(self._text, self._pos)
        if end == self._pos:
            self.error(InvalidNameError, f"Invalid {kind} name.")

        name: str = self._text[self._pos:end]
        self._pos = end
        return name

    def propertyEquals_skip(self) -> None:
        """Skip the = between a property name and its value"""
        if self._char() != PROPERTY_EQUALS:
            self.error(
                MissingEqualsError,
                'Template property must have "=" between the name and the value.',
            )
        self._pos += 1

    def propertyValue_scan(self) -> str:
        """
        Scan a quoted property value

        A backslash escapes the character after it, which is kept
        literally; the backslash itself is dropped.

        Raises:
            MissingOpenQuoteError: If the value is not quoted
            UnterminatedValueError: If the opening quote is never matched
        """
        open_quote: str = self._char()
        if open_quote not in QUOTES:
            self.error(MissingOpenQuoteError, "Template property value must start with a quote.")
        self._pos += 1

        value: list = []
        escaped: bool = False

        while not self._eos():
            char: str = self._char()
            self._pos += 1

            if escaped:
                value.append(char)
                escaped = False
            elif char == ESCAPE:
                escaped = True
            elif char == open_quote:
                return "".join(value)
            else:
                value.append(char)

        self.error(
            UnterminatedValueError,
            "Text for template property value must have a matching end quote.",
        )

    def property_scan(self) -> Tuple[str, str]:
        """Scan one name="value" property"""
        name: str = self.name_scan(kind="template property")

        self.space_skip()
        self.propertyEquals_skip()
        self.space_skip()

        value: str = self.propertyValue_scan()
        return name, value

    def commentEnd_not(self) -> bool:
        """Check that neither --> nor the end of text is at the cursor"""
        return not self._startsWith(COMMENT_CLOSE) and not self._eos()

    def commentClose_scan(self) -> None:
        """Skip the closing -->"""
        if self._eos():
            self.error(UnterminatedCommentError, 'Template comment must end with a "-->".')
        if not self._startsWith(COMMENT_CLOSE):
            self.error(MissingCloseDelimiterError, 'Template comment must end with a "-->".')
        self._pos += len(COMMENT_CLOSE)

    def transform(self) -> Optional[Directive]:
        """
        Transform the loaded comment into template data

        Returns:
            The Directive, or None if this is not a template comment

        Raises:
            NotLoadedError: If no comment is loaded
            MalformedCommentError: On any grammar violation (see errors.py)
        """
        if self._text is None:
            raise NotLoadedError("CommentTransformer has no comment loaded.")

        self.reset()
        self.commentOpen_scan()
        self.space_skip()

        if not self.template_is():
            return None

        self._pos += len(TEMPLATE_SIGIL)
        directive = Directive(name=self.name_scan())

        self.space_skip()

        # A bare name still needs the closing -->
        if self._eos():
            self.error(UnterminatedCommentError, 'Template comment needs to end with a "-->".')

        while self.commentEnd_not():
            name, value = self.property_scan()
            directive.properties.append({name: value})
            self.space_skip()

        self.commentClose_scan()

        self._directive = directive
        return directive
