"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .document import DocumentResult
    from .templates import TemplateFile


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the extraction pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as extraction progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, blacklist, whitelist,
          htmlExtensions, moduleExtensions, strict, highlight
        - env_check: readerKwargs, envOK
        - templates_load: templates
        - templates_extract: documents
        - report_write: reportFile
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing template files
        outputdir: Directory for the directive report
        verbosity: Logging verbosity level (1-3)
        pattern: Template glob patterns (relative to inputdir)
        blacklist: Globs of files to leave out
        whitelist: Globs of files to always include
        htmlExtensions: Extensions read as HTML text
        moduleExtensions: Extensions imported as template modules
        strict: Abort on the first malformed directive
        highlight: Also write highlighted template sources
        envOK: Environment validation passed
        readerKwargs: Merged FileReader arguments (options file + CLI)
        templates: Loaded template files
        documents: Extraction result per root-relative template path
        reportFile: Path of the written JSON report
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: Optional[List[str]] = field(default=None)
    blacklist: Optional[List[str]] = field(default=None)
    whitelist: Optional[List[str]] = field(default=None)
    htmlExtensions: Optional[List[str]] = field(default=None)
    moduleExtensions: Optional[List[str]] = field(default=None)
    strict: bool = field(default=False)
    highlight: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    readerKwargs: Dict[str, Any] = field(default_factory=dict)
    templates: Optional[List[Any]] = field(default=None)  # List[TemplateFile] at runtime
    documents: Optional[Dict[str, Any]] = field(default=None)  # path -> DocumentResult
    reportFile: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the extraction pipeline.

        Args:
            options: Parsed CLI arguments (pattern, blacklist, etc.)
            inputdir: Directory containing template files
            outputdir: Directory for extraction output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        # Get the dictionary of all attributes from the Namespace
        options_dict = vars(options)

        # Get the set of valid field names for ProgramState
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # Merge the filtered CLI options with the explicitly defined arguments.
        # This will override any defaults set in the dataclass.
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        # Instantiate the dataclass by unpacking the merged dictionary.
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            templates_load,
            templates_extract,
            report_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
