#!/usr/bin/env python3
"""
ovus - HTML template directive extractor

Finds ovus templates in an input directory, extracts every directive
comment from them, and writes a JSON report to the output directory.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - HTML-first: Templates stay plain HTML; directives live in comments
    - Directive markup: <!-- @name prop="value" --> names a component
    - Lossless: Non-directive text is kept so components can be
      substituted back in place

Usage:
    ovus inputdir/ outputdir/ [--pattern GLOB ...]

    The report is written to outputdir/directives.json.

Examples:
    # All HTML templates under the input directory
    ovus templates/ output/

    # Python module templates too, skipping drafts
    ovus templates/ output/ --pattern "**/*.html" "**/*.py" --blacklist "**/drafts/**"

    # Abort on the first malformed directive, write highlighted sources
    ovus templates/ output/ --strict --highlight -vv
"""

import json
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Any, Dict

from chris_plugin import chris_plugin
from .config import appsettings, extensions_normalize
from .lib import FileReader, document_extract, __version__, LOG, state_connectToLogger
from .lib.errors import OvusError, MalformedCommentError, error_kind
from .lib.lexer import source_highlight
from .lib.options import options_loadOptional
from .lib.reader import strings_listify
from .models import ProgramState, pipeline
from .models.document import DocumentResult


DISPLAY_TITLE = r"""
   _____   ___  _______
  / _ \ \ / / |/ / ___/
 | (_) \ V /| |_| \__ \
  \___/ \_/  \___/|___/

  HTML template directive extractor
"""

# Define CLI arguments
parser = ArgumentParser(
    description="ovus - extract component directives from HTML template comments",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    nargs="+",
    default=None,
    type=str,
    help="Template file glob(s), relative to inputdir. Defaults to every HTML extension",
)

parser.add_argument(
    "--blacklist", nargs="*", default=None, type=str, help="Globs of files to leave out"
)

parser.add_argument(
    "--whitelist", nargs="*", default=None, type=str, help="Globs of files to always include"
)

parser.add_argument(
    "--htmlExtensions", nargs="+", default=None, type=str, help="Extensions read as HTML templates"
)

parser.add_argument(
    "--moduleExtensions",
    nargs="+",
    default=None,
    type=str,
    help="Extensions imported as Python template modules",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=appsettings.strict_mode,
    help="Abort on the first malformed directive",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    default=False,
    help="Also write syntax-highlighted template sources to outputdir",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and merge reader options.

    Options come from the optional ovus.yaml in inputdir; explicit CLI
    arguments override them.

    Returns:
        ProgramState with added fields:
            - readerKwargs: FileReader arguments
            - envOK: True if environment is valid

    Exits:
        1 if inputdir is missing or the options file is invalid
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not Path(state.inputdir).is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    try:
        options = options_loadOptional(state.inputdir, appsettings.options_filename)
    except OvusError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    kwargs: Dict[str, Any] = options.readerKwargs_get() if options else {}
    if options:
        LOG(f"Options file: {options.options_path}", level=2)

    cli_kwargs: Dict[str, Any] = {
        "path": state.pattern,
        "blacklist": state.blacklist,
        "whitelist": state.whitelist,
        "html_extensions": state.htmlExtensions,
        "module_extensions": state.moduleExtensions,
    }
    kwargs.update({k: v for k, v in cli_kwargs.items() if v is not None})
    for key in ("html_extensions", "module_extensions"):
        if key in kwargs:
            kwargs[key] = extensions_normalize(strings_listify(kwargs[key]))

    if "path" not in kwargs:
        extensions = kwargs.get("html_extensions") or appsettings.html_extensions
        kwargs["path"] = [f"**/*{ext}" for ext in extensions]

    kwargs["root"] = Path(state.inputdir)
    state.readerKwargs = kwargs
    LOG(f"Template globs: {kwargs['path']}", level=2)

    Path(state.outputdir).mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def templates_load(inputstate: ProgramState) -> ProgramState:
    """
    Find and read every template file.

    Returns:
        ProgramState with added field:
            - templates: List[TemplateFile]

    Exits:
        1 on unreadable files or unsupported template files
    """
    state = inputstate.copy()

    LOG("Loading template files...", level=1)

    try:
        state.templates = FileReader(**state.readerKwargs).files_load()
    except (OvusError, OSError) as e:
        print(f"Error loading templates: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Loaded {len(state.templates)} templates", level=2)
    return state


def templates_extract(inputstate: ProgramState) -> ProgramState:
    """
    Extract directives from every loaded template.

    Returns:
        ProgramState with added field:
            - documents: Dict of root-relative template path -> DocumentResult

    Exits:
        1 if a template does not resolve to text, or in strict mode on
        the first malformed directive
    """
    state = inputstate.copy()

    LOG("Extracting directives...", level=1)

    documents: Dict[str, DocumentResult] = {}
    for template in state.templates or []:
        try:
            documents[template.key_get()] = document_extract(
                template.text_resolve(), strict=state.strict
            )
        except MalformedCommentError as e:
            print(f"Parse error in template '{template.name}': {e}", file=sys.stderr)
            sys.exit(1)
        except OvusError as e:
            print(f"Error in template '{template.name}': {e}", file=sys.stderr)
            sys.exit(1)

    state.documents = documents
    return state


def report_build(documents: Dict[str, DocumentResult]) -> Dict[str, Any]:
    """
    Build the JSON-serialisable directive report.

    Example:
        {"templates": [{"name": "card",
                        "path": "components/card.html",
                        "segments": 3,
                        "comments": 1,
                        "directives": [{"segment": 1, "name": "button",
                                        "properties": [{"class": "big"}]}],
                        "errors": []}]}
    """
    templates = []
    for key, document in documents.items():
        templates.append({
            "name": appsettings.templateName_make(key),
            "path": key,
            "segments": len(document.segments),
            "comments": len(document.comments),
            "directives": [
                {
                    "segment": c.index,
                    "name": c.directive.name,
                    "properties": c.directive.properties,
                }
                for c in document.comments if c.directive is not None
            ],
            "errors": [
                {
                    "segment": c.index,
                    "kind": error_kind(c.error),
                    "message": getattr(c.error, "message", str(c.error)),
                    "position": getattr(c.error, "position", None),
                    "text": c.segment.text,
                }
                for c in document.errors
            ],
        })
    return {"version": __version__, "templates": templates}


def report_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the JSON report (and highlighted sources if requested).

    Returns:
        ProgramState with added field:
            - reportFile: Path to the written report
    """
    state = inputstate.copy()

    if state.documents is None:
        print("Error: No extraction results available", file=sys.stderr)
        sys.exit(1)

    report_file = Path(state.outputdir) / appsettings.report_filename
    report_file.write_text(
        json.dumps(report_build(state.documents), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    state.reportFile = report_file
    LOG(f"Wrote {report_file}", level=2)

    if state.highlight:
        for template in state.templates or []:
            # a/card.html is written to outputdir/a/card.html.html
            html_file = Path(state.outputdir) / f"{template.key_get()}.html"
            html_file.parent.mkdir(parents=True, exist_ok=True)
            html_file.write_text(
                source_highlight(template.text_resolve(), output="html", title=template.name),
                encoding="utf-8",
            )
            LOG(f"Wrote {html_file}", level=3)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display extraction results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    if state.reportFile is None:
        print("Error: Extraction failed", file=sys.stderr)
        sys.exit(1)

    documents = state.documents or {}
    directive_count = sum(len(d.directives) for d in documents.values())
    error_count = sum(len(d.errors) for d in documents.values())

    LOG("\n✓ Extraction successful!", level=1)
    LOG(f"  Report:     {state.reportFile}", level=1)
    LOG(f"  Templates:  {len(documents)}", level=1)
    LOG(f"  Directives: {directive_count}", level=1)
    if error_count:
        LOG(f"  Malformed:  {error_count} (see report)", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="ovus - HTML template directive extractor",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - extract directives from the templates in inputdir.

    Orchestrates the full pipeline:
        1. env_check: Validate paths, merge options
        2. templates_load: Find and read template files
        3. templates_extract: Scan and transform every comment
        4. report_write: Write the JSON report (and highlighted sources)
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, templates_load, templates_extract, report_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
