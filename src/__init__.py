"""
ovus - HTML template engine designed for creating components

Template components are referenced from HTML comments:

    <!-- @button class="rounded p-1" x-on:click="save()" -->

ovus finds those directive comments and extracts their template data.
"""

__version__ = "0.1.0"

from .lib import (
    CommentScanner,
    CommentTransformer,
    document_extract,
    FileReader,
    LOG,
    state_connectToLogger,
)
from .models import Segment, Directive, DocumentResult

__all__ = [
    "CommentScanner",
    "CommentTransformer",
    "document_extract",
    "FileReader",
    "Segment",
    "Directive",
    "DocumentResult",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
