"""
Comment scanner for HTML template text

Splits a document into alternating comment / non-comment segments so that
comment text can be transformed into template data and later re-inserted
at exactly the same place in the surrounding HTML.

Quote tracking keeps comment-shaped text inside attribute values, e.g.
<div title="<!-- not a comment -->">, from being treated as a comment.
A backslash escapes the next quote (it does not toggle quote state) and
a doubled backslash yields one literal backslash; the escaping
backslashes themselves are dropped from the segment text.

Example:
    >>> scanner = CommentScanner("<p>Hi</p><!-- @button -->")
    >>> [s.text for s in scanner.scan()]
    ['<p>Hi</p>', '<!-- @button -->']
"""

from typing import List, Optional

from ..models.document import Segment
from .errors import InvalidInputError, NotLoadedError
from .log import LOG


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"


class CommentScanner:
    """
    Scanner that separates HTML text along its comments

    Reusable: load() swaps in new text and resets, reset() rewinds the
    scanner over the text already loaded. Not safe to share between
    threads; construct one per worker.
    """

    def __init__(self, text: Optional[str] = None) -> None:
        """
        Initialize scanner, optionally loading text

        Args:
            text: HTML text to scan for comments

        Raises:
            InvalidInputError: If text is given and is not a string
        """
        self._text: Optional[str] = None
        self._pos: int = 0
        self._segments: List[Segment] = []
        self._closeMissing: bool = False

        if text is not None:
            self.load(text)

    @property
    def text(self) -> Optional[str]:
        """The loaded text; None if nothing loaded"""
        return self._text

    @property
    def position(self) -> int:
        """Index of the next character to be scanned"""
        return self._pos

    @property
    def segments(self) -> List[Segment]:
        """Segments compiled by scan(); empty before scanning"""
        return self._segments

    def load(self, text: str) -> None:
        """
        Load text into the scanner and reset scanning state

        Raises:
            InvalidInputError: If text is not a string
        """
        if not isinstance(text, str):
            raise InvalidInputError(
                f"CommentScanner requires a string for the text, got {type(text).__name__}."
            )

        self._text = text
        self.reset()

    def reset(self) -> None:
        """Rewind to the start of the loaded text and drop segments"""
        self._pos = 0
        self._segments = []
        self._closeMissing = False

    def _loaded_check(self) -> str:
        if self._text is None:
            raise NotLoadedError("CommentScanner has no text loaded.")
        return self._text

    def _peek(self, n: int) -> str:
        return self._text[self._pos:self._pos + n]

    def comment_next(self) -> bool:
        """
        Check whether a comment opening (<!--) is at the current position

        Does not consume anything.

        Raises:
            NotLoadedError: If no text is loaded
        """
        self._loaded_check()
        return self._peek(len(COMMENT_OPEN)) == COMMENT_OPEN

    def comment_scan(self) -> Optional[str]:
        """
        Match the shortest <!-- ... --> span at the current position

        The comment body may span lines. Does not move the scanner.

        Returns:
            The full comment text including delimiters, or None if the
            comment is never closed
        """
        if self._closeMissing:
            return None

        close_pos: int = self._text.find(COMMENT_CLOSE, self._pos + len(COMMENT_OPEN))
        if close_pos == -1:
            # No later opening can find a close either
            self._closeMissing = True
            return None

        return self._text[self._pos:close_pos + len(COMMENT_CLOSE)]

    def scan(self) -> List[Segment]:
        """
        Scan the text and separate it into comment / non-comment segments

        Empty non-comment segments are not emitted, so a document that
        starts or ends with a comment has no empty segment at that end.

        Returns:
            The list of segments, also available via the segments property

        Raises:
            NotLoadedError: If no text is loaded
        """
        text: str = self._loaded_check()
        current: List[str] = []
        in_string: bool = False
        escape_pending: bool = False

        LOG(f"Scanning {len(text) - self._pos} characters for comments", level=3)

        while self._pos < len(text):
            char: str = text[self._pos]

            # Possible comment opening, only outside quoted text
            if char == "<" and not in_string and self.comment_next():
                comment = self.comment_scan()
                if comment is not None:
                    if current:
                        self._segments.append(Segment(is_comment=False, text="".join(current)))
                        current = []
                    self._segments.append(Segment(is_comment=True, text=comment))
                    self._pos += len(comment)
                    continue
                # Unterminated comment: fall through as ordinary text

            elif char == "\\":
                # A second backslash is a literal one
                if escape_pending:
                    current.append(char)
                escape_pending = not escape_pending
                self._pos += 1
                continue

            elif char in ('"', "'"):
                if escape_pending:
                    escape_pending = False
                else:
                    in_string = not in_string
                current.append(char)
                self._pos += 1
                continue

            current.append(char)
            self._pos += 1

        if current:
            self._segments.append(Segment(is_comment=False, text="".join(current)))

        LOG(f"Scanned {len(self._segments)} segments", level=3)
        return self._segments
