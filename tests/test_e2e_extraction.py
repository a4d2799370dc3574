"""
End-to-end extraction tests

Tests the full pipeline: template directory → FileReader → extraction →
JSON report, by running the CLI pipeline stages on a ProgramState.
"""

import json
import pytest
from argparse import Namespace
from pathlib import Path

from ovus.__main__ import (
    env_check,
    templates_load,
    templates_extract,
    report_write,
    results_report,
    report_build,
)
from ovus.lib.extractor import document_extract
from ovus.models import ProgramState, pipeline


CARD_HTML = """<div class="card">
  <!-- @card-title text="Hello" -->
  <!-- plain -->
  <!-- @button class="rounded" class="primary" -->
</div>
"""

BROKEN_HTML = '<p><!-- @button class=hi --></p><!-- @ok -->'


@pytest.fixture
def inputdir(tmp_path: Path) -> Path:
    directory = tmp_path / "in"
    directory.mkdir()
    (directory / "card.html").write_text(CARD_HTML, encoding="utf-8")
    (directory / "broken.html").write_text(BROKEN_HTML, encoding="utf-8")
    (directory / "footer.py").write_text(
        "def default():\n    return '<footer><!-- @copyright year=\"2024\" --></footer>'\n",
        encoding="utf-8",
    )
    return directory


def run(state: ProgramState) -> ProgramState:
    return pipeline(state, env_check, templates_load, templates_extract, report_write, results_report)


class TestPipeline:

    def test_default_globs_html_only(self, inputdir, tmp_path):
        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

        assert sorted(state.documents) == ["broken.html", "card.html"]
        assert state.reportFile == tmp_path / "out" / "directives.json"

    def test_report_content(self, inputdir, tmp_path):
        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

        report = json.loads(state.reportFile.read_text(encoding="utf-8"))
        by_name = {t["name"]: t for t in report["templates"]}

        card = by_name["card"]
        assert card["path"] == "card.html"
        assert card["comments"] == 3
        assert card["directives"] == [
            {"segment": 1, "name": "card-title", "properties": [{"text": "Hello"}]},
            {"segment": 5, "name": "button",
             "properties": [{"class": "rounded"}, {"class": "primary"}]},
        ]
        assert card["errors"] == []

        broken = by_name["broken"]
        assert [d["name"] for d in broken["directives"]] == ["ok"]
        assert broken["errors"][0]["kind"] == "MissingOpenQuoteError"
        assert broken["errors"][0]["text"] == "<!-- @button class=hi -->"
        assert broken["errors"][0]["position"] == 19

    def test_module_templates(self, inputdir, tmp_path):
        state = run(ProgramState(
            inputdir=inputdir,
            outputdir=tmp_path / "out",
            pattern=["*.py"],
        ))

        directives = state.documents["footer.py"].directives
        assert [(d.name, d.properties) for d in directives] == [("copyright", [{"year": "2024"}])]

    def test_strict_mode_exits(self, inputdir, tmp_path):
        with pytest.raises(SystemExit) as err:
            run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out", strict=True))
        assert err.value.code == 1

    def test_options_file(self, inputdir, tmp_path):
        (inputdir / "ovus.yaml").write_text("blacklist: [broken.html]\n", encoding="utf-8")

        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

        assert sorted(state.documents) == ["card.html"]

    def test_cli_overrides_options_file(self, inputdir, tmp_path):
        (inputdir / "ovus.yaml").write_text("blacklist: [broken.html]\n", encoding="utf-8")

        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out", blacklist=[]))

        assert sorted(state.documents) == ["broken.html", "card.html"]

    def test_options_file_single_string_blacklist(self, inputdir, tmp_path):
        drafts = inputdir / "drafts"
        drafts.mkdir()
        (drafts / "wip.html").write_text("<!-- @wip -->", encoding="utf-8")
        (inputdir / "ovus.yaml").write_text('blacklist: "drafts/**"\n', encoding="utf-8")

        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

        assert sorted(state.documents) == ["broken.html", "card.html"]

    def test_extensions_without_dot(self, inputdir, tmp_path):
        (inputdir / "page.xhtml").write_text("<!-- @page -->", encoding="utf-8")

        state = run(ProgramState(
            inputdir=inputdir, outputdir=tmp_path / "out", htmlExtensions=["html"]
        ))

        assert state.readerKwargs["path"] == ["**/*.html"]
        assert "page.xhtml" not in state.documents

    def test_bad_options_file_exits(self, inputdir, tmp_path):
        (inputdir / "ovus.yaml").write_text("unknown: 1\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            env_check(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

    def test_missing_inputdir_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            env_check(ProgramState(inputdir=tmp_path / "nope", outputdir=tmp_path / "out"))

    def test_unsupported_file_exits(self, inputdir, tmp_path):
        (inputdir / "notes.txt").write_text("x", encoding="utf-8")

        with pytest.raises(SystemExit):
            run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out", pattern=["*"]))

    def test_highlight_output(self, inputdir, tmp_path):
        outputdir = tmp_path / "out"
        run(ProgramState(inputdir=inputdir, outputdir=outputdir, highlight=True))

        html = (outputdir / "card.html.html").read_text(encoding="utf-8")
        assert "<html" in html
        assert "card-title" in html


class TestReportBuild:

    def test_empty(self):
        assert report_build({})["templates"] == []

    def test_counts(self):
        report = report_build({"t": document_extract("<p>a</p><!-- @x --><p>b</p>")})
        template = report["templates"][0]

        assert template["name"] == "t"
        assert template["path"] == "t"
        assert template["segments"] == 3
        assert template["comments"] == 1
        assert template["directives"] == [{"segment": 1, "name": "x", "properties": []}]


class TestProgramState:

    def test_state_from_namespace(self, tmp_path):
        options = Namespace(pattern=["*.html"], strict=True, verbosity=3, blacklist=None)

        state = ProgramState.state_createFromNamespace(
            options=options, inputdir=tmp_path, outputdir=tmp_path / "out"
        )

        assert state.pattern == ["*.html"]
        assert state.strict is True
        assert state.verbosity == 3
        assert state.inputdir == tmp_path

    def test_unknown_namespace_fields_dropped(self, tmp_path):
        state = ProgramState.state_createFromNamespace(
            options=Namespace(verbosity=2, unrelated=True), inputdir=tmp_path, outputdir=tmp_path
        )

        assert state.verbosity == 2
        assert not hasattr(state, "unrelated")

    def test_copy_is_independent(self):
        state = ProgramState(verbosity=2)
        copy = state.copy()
        copy.verbosity = 3

        assert state.verbosity == 2


class TestSameNamedTemplates:

    @pytest.fixture
    def inputdir(self, tmp_path: Path) -> Path:
        directory = tmp_path / "in"
        for folder, directive in (("a", "one"), ("b", "two")):
            (directory / folder).mkdir(parents=True)
            (directory / folder / "card.html").write_text(
                f"<!-- @{directive} -->", encoding="utf-8"
            )
        return directory

    def test_both_reported(self, inputdir, tmp_path):
        state = run(ProgramState(inputdir=inputdir, outputdir=tmp_path / "out"))

        report = json.loads(state.reportFile.read_text(encoding="utf-8"))
        entries = sorted((t["path"], t["name"]) for t in report["templates"])
        names = sorted(d["name"] for t in report["templates"] for d in t["directives"])

        assert entries == [("a/card.html", "card"), ("b/card.html", "card")]
        assert names == ["one", "two"]

    def test_html_and_module_with_same_stem(self, inputdir, tmp_path):
        (inputdir / "a" / "card.py").write_text(
            "default = '<!-- @three -->'\n", encoding="utf-8"
        )

        state = run(ProgramState(
            inputdir=inputdir, outputdir=tmp_path / "out", pattern=["**/*.html", "**/*.py"]
        ))

        assert sorted(state.documents) == ["a/card.html", "a/card.py", "b/card.html"]

    def test_highlight_files_kept_apart(self, inputdir, tmp_path):
        outputdir = tmp_path / "out"
        run(ProgramState(inputdir=inputdir, outputdir=outputdir, highlight=True))

        assert ">one<" in (outputdir / "a" / "card.html.html").read_text(encoding="utf-8")
        assert ">two<" in (outputdir / "b" / "card.html.html").read_text(encoding="utf-8")


class TestModuleExport:

    def test_callable_runs_once_with_highlight(self, tmp_path):
        inputdir = tmp_path / "in"
        inputdir.mkdir()
        calls = tmp_path / "calls.txt"
        (inputdir / "footer.py").write_text(
            "def default():\n"
            f"    with open({str(calls)!r}, 'a') as f:\n"
            "        f.write('x')\n"
            "    return '<!-- @footer -->'\n",
            encoding="utf-8",
        )

        run(ProgramState(
            inputdir=inputdir, outputdir=tmp_path / "out", pattern=["*.py"], highlight=True
        ))

        assert calls.read_text(encoding="utf-8") == "x"
