"""
Template file model

Returned by FileReader.files_load(), one per matched file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from ..lib.errors import InvalidInputError


TemplateContent = Union[str, Callable[[], str]]


@dataclass
class TemplateFile:
    """
    A loaded template and the logical name derived from its file

    Attributes:
        name: File base name without extension (e.g. "eg-button")
        content: Literal template text, or a zero-argument callable
                 returning it (module templates may export either)
        path: Source file the template was read from
        key: Root-relative POSIX path, unique within one reader run
    """
    name: str
    content: TemplateContent
    path: Optional[Path] = None
    key: Optional[str] = None
    _text: Optional[str] = field(default=None, init=False, repr=False, compare=False)

    def text_resolve(self) -> str:
        """
        Return the template text, calling content if it is callable

        A callable is called once; later calls return the same text.

        Raises:
            InvalidInputError: If the resolved content is not a string
        """
        if self._text is not None:
            return self._text

        text = self.content() if callable(self.content) else self.content

        if not isinstance(text, str):
            raise InvalidInputError(
                f"Template '{self.name}' must resolve to a string, "
                f"got {type(text).__name__}."
            )
        self._text = text
        return text

    def key_get(self) -> str:
        """Identifier for reports: the relative path, else the name"""
        return self.key if self.key is not None else self.name
