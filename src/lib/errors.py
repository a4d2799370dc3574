"""
Exception hierarchy for ovus

Errors fall into three kinds:
- InvalidInputError: a non-text value was handed to a load operation
- NotLoadedError: an operation needing text was called on an empty instance
- MalformedCommentError (and subclasses): a directive comment broke the grammar

A comment that is simply not a directive is not an error; the transformer
returns None for it.
"""

from typing import Optional


class OvusError(Exception):
    """Base class for every ovus exception"""
    pass


class InvalidInputError(OvusError, TypeError):
    """Raised when load() receives something other than a string"""
    pass


class NotLoadedError(OvusError, RuntimeError):
    """Raised when scanning or transforming before any text was loaded"""
    pass


class TemplateFileError(OvusError):
    """Raised when a template file cannot be turned into template text"""
    pass


class OptionsError(OvusError):
    """Raised when an ovus.yaml options file cannot be read"""
    pass


class MalformedCommentError(OvusError):
    """
    A comment that attempted to be a directive but does not parse

    Attributes:
        message: Human-readable description of the violation
        text: The full comment text being transformed
        position: Cursor offset at the moment of failure
    """

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        self.message = message
        self.text = text
        self.position = position
        super().__init__(self.context_format())

    def context_format(self, width: int = 40) -> str:
        """
        Build the error message with a source window and caret

        Example output:
            Template property value must start with a quote.
            Position 20
            Context: ...<!-- @button class=hi -->...
                                         ^
        """
        if not self.text:
            return self.message

        context_start: int = max(0, self.position - width)
        context_end: int = min(len(self.text), self.position + width)
        context: str = self.text[context_start:context_end]

        return (
            f"{self.message}\n"
            f"Position {self.position}\n"
            f"Context: ...{context}...\n"
            f"         {' ' * (self.position - context_start + 3)}^"
        )


class MissingOpenDelimiterError(MalformedCommentError):
    """Comment text does not start with <!--"""
    pass


class InvalidNameError(MalformedCommentError):
    """Template or property name breaks the name grammar"""
    pass


class MissingEqualsError(MalformedCommentError):
    """Property name is not followed by ="""
    pass


class MissingOpenQuoteError(MalformedCommentError):
    """Property value does not start with ' or \" """
    pass


class UnterminatedValueError(MalformedCommentError):
    """Property value quote never closes"""
    pass


class MissingCloseDelimiterError(MalformedCommentError):
    """Comment does not end with -->"""
    pass


class UnterminatedCommentError(MissingCloseDelimiterError):
    """Input ran out before the closing --> was reached"""
    pass


def error_kind(error: Optional[BaseException]) -> Optional[str]:
    """Short name of an error class for reports, e.g. 'InvalidNameError'"""
    if error is None:
        return None
    return type(error).__name__
