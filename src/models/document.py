"""
Document data models

Type-safe structures passed between the scanner, the transformer and
whatever consumes their output.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Segment:
    """
    A contiguous slice of a scanned document

    Returned by CommentScanner.scan(). Comment segments always include
    their <!-- and --> delimiters.

    Attributes:
        is_comment: Whether this slice is a full HTML comment
        text: The slice text

    Example:
        For source "<p>Hi</p><!-- @button -->":
        [Segment(is_comment=False, text="<p>Hi</p>"),
         Segment(is_comment=True, text="<!-- @button -->")]
    """
    is_comment: bool
    text: str


@dataclass
class Directive:
    """
    Template data extracted from one directive comment

    Attributes:
        name: Template name following the @ sigil
        properties: One single-key dict per declared property, in
                    declaration order; duplicate keys are kept

    Example:
        For comment '<!-- @button class="a" class="b" -->':
        Directive(name="button", properties=[{"class": "a"}, {"class": "b"}])
    """
    name: str
    properties: List[Dict[str, str]] = field(default_factory=list)

    def property_values(self, name: str) -> List[str]:
        """Every value declared for a property name, in order"""
        return [prop[name] for prop in self.properties if name in prop]

    def property_names(self) -> List[str]:
        """Property names in declaration order (duplicates included)"""
        return [key for prop in self.properties for key in prop]


@dataclass
class CommentResult:
    """
    Outcome of transforming one comment segment

    Exactly one of these holds:
    - directive is set: the comment was a valid directive
    - error is set: the comment attempted a directive and was malformed
    - both None: an ordinary HTML comment

    Attributes:
        index: Position of the segment in DocumentResult.segments
        segment: The comment segment itself
        directive: Parsed directive, if any
        error: Parse failure, recorded when not extracting strictly
    """
    index: int
    segment: Segment
    directive: Optional[Directive] = None
    error: Optional[Exception] = None


@dataclass
class DocumentResult:
    """
    Result of extracting directives from one document

    Attributes:
        segments: All scanned segments in document order
        comments: One CommentResult per comment segment
    """
    segments: List[Segment] = field(default_factory=list)
    comments: List[CommentResult] = field(default_factory=list)

    @property
    def directives(self) -> List[Directive]:
        """Successfully parsed directives in document order"""
        return [c.directive for c in self.comments if c.directive is not None]

    @property
    def errors(self) -> List[CommentResult]:
        """Comment results that failed to parse"""
        return [c for c in self.comments if c.error is not None]
