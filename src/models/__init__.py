"""
Models package for ovus

Contains data structures and type definitions for the extraction pipeline.
"""

from .state import ProgramState, pipeline
from .document import Segment, Directive, CommentResult, DocumentResult
from .templates import TemplateFile

__all__ = [
    "ProgramState",
    "pipeline",
    "Segment",
    "Directive",
    "CommentResult",
    "DocumentResult",
    "TemplateFile",
]
