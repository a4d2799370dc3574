"""
Directive extraction over a whole document

Runs the two stages in sequence: the CommentScanner splits the document,
then one CommentTransformer is reused for every comment segment.

Example:
    >>> result = document_extract('<div><!-- @button class="big" --></div>')
    >>> result.directives
    [Directive(name='button', properties=[{'class': 'big'}])]
"""

from typing import Optional

from ..config import appsettings
from ..models.document import CommentResult, DocumentResult
from .errors import MalformedCommentError
from .log import LOG, WARN
from .scanner import CommentScanner
from .transformer import CommentTransformer


def document_extract(text: str, strict: Optional[bool] = None) -> DocumentResult:
    """
    Scan a document and transform each of its comments

    Args:
        text: Full template document text
        strict: Propagate the first malformed directive instead of
                recording it; defaults to appsettings.strict_mode

    Returns:
        DocumentResult with all segments and one CommentResult per comment

    Raises:
        InvalidInputError: If text is not a string
        MalformedCommentError: In strict mode, on the first bad directive
    """
    if strict is None:
        strict = appsettings.strict_mode

    scanner = CommentScanner(text)
    transformer = CommentTransformer()
    result = DocumentResult(segments=scanner.scan())

    for index, segment in enumerate(result.segments):
        if not segment.is_comment:
            continue

        transformer.load(segment.text)
        comment = CommentResult(index=index, segment=segment)

        try:
            comment.directive = transformer.transform()
        except MalformedCommentError as e:
            if strict:
                raise
            WARN(f"Skipping malformed directive in segment {index}: {e.message}")
            comment.error = e

        if comment.directive is not None:
            LOG(f"Segment {index}: @{comment.directive.name} "
                f"({len(comment.directive.properties)} properties)", level=3)
        result.comments.append(comment)

    LOG(f"Extracted {len(result.directives)} directives from "
        f"{len(result.comments)} comments", level=2)
    return result
