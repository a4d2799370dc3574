"""
ovus - HTML template directive extraction

Scans HTML templates for comments and turns @-directive comments into
structured template data.
"""

__version__ = "0.1.0"

from .scanner import CommentScanner
from .transformer import CommentTransformer
from .extractor import document_extract
from .reader import FileReader
from .log import LOG, state_connectToLogger

__all__ = [
    "CommentScanner",
    "CommentTransformer",
    "document_extract",
    "FileReader",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
