"""
File reader tests

Tests template discovery from globs, blacklist / whitelist handling and
loading of HTML and Python module templates.
"""

import pytest
from pathlib import Path

from ovus.lib.reader import FileReader
from ovus.lib.errors import InvalidInputError, TemplateFileError
from ovus.models.templates import TemplateFile


BUTTON_HTML = '<button>\n  <!-- @button-item prop="value" -->\n</button>\n'
MODULE_TEXT = '<button>\n  <!-- @button-item prop="value" -->\n</button>'


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    """A template directory shaped like a small component library"""
    (tmp_path / "eg-button.html").write_text(BUTTON_HTML, encoding="utf-8")
    (tmp_path / "eg-button-module.py").write_text(
        "def default():\n"
        f"    return {MODULE_TEXT!r}\n",
        encoding="utf-8",
    )
    (tmp_path / "eg-button-literal.py").write_text(
        f"default = {MODULE_TEXT!r}\n", encoding="utf-8"
    )
    (tmp_path / "eg-no-export.py").write_text("template = 'nope'\n", encoding="utf-8")
    (tmp_path / "eg-poop-template.poop").write_text("<p>poop</p>", encoding="utf-8")
    return tmp_path


class TestReaderProperties:

    def test_path_string_becomes_list(self):
        assert FileReader("example").path == ["example"]

    def test_path_list(self):
        assert FileReader(["example", "example2"]).path == ["example", "example2"]

    def test_blacklist(self):
        assert FileReader("example", blacklist=["1", "2", "3"]).blacklist == ["1", "2", "3"]

    def test_blacklist_empty_by_default(self):
        assert FileReader("example").blacklist == []

    def test_whitelist(self):
        assert FileReader("example", whitelist=["1", "2"]).whitelist == ["1", "2"]

    def test_whitelist_empty_by_default(self):
        assert FileReader("example").whitelist == []

    def test_html_extensions(self):
        reader = FileReader("example", html_extensions=[".html", ".xhtml"])
        assert reader.html_extensions == [".html", ".xhtml"]

    def test_html_extensions_default(self):
        assert FileReader("example").html_extensions == [".html"]

    def test_module_extensions(self):
        reader = FileReader("example", module_extensions=[".py", ".pyw"])
        assert reader.module_extensions == [".py", ".pyw"]

    def test_module_extensions_default(self):
        assert FileReader("example").module_extensions == [".py"]

    def test_single_string_lists(self):
        reader = FileReader("example", blacklist="drafts/**", whitelist="keep.html")

        assert reader.blacklist == ["drafts/**"]
        assert reader.whitelist == ["keep.html"]

    def test_extensions_get_leading_dot(self):
        reader = FileReader("example", html_extensions=["html", ".htm"], module_extensions="py")

        assert reader.html_extensions == [".html", ".htm"]
        assert reader.module_extensions == [".py"]


class TestLoadFiles:

    def test_read_html_template(self, templates):
        files = FileReader("eg-button.html", root=templates).files_load()

        assert len(files) == 1
        assert files[0].name == "eg-button"
        assert files[0].content == BUTTON_HTML
        assert files[0].path == templates / "eg-button.html"
        assert files[0].key == "eg-button.html"

    def test_read_module_template_function(self, templates):
        files = FileReader("eg-button-module.py", root=templates).files_load()

        assert len(files) == 1
        assert callable(files[0].content)
        assert files[0].name == "eg-button-module"
        assert files[0].text_resolve() == MODULE_TEXT

    def test_read_module_template_literal(self, templates):
        files = FileReader("eg-button-literal.py", root=templates).files_load()

        assert files[0].content == MODULE_TEXT
        assert files[0].text_resolve() == MODULE_TEXT

    def test_read_mixed_templates(self, templates):
        reader = FileReader(["*.html", "*.py"], blacklist=["eg-no-export.py"], root=templates)
        names = sorted(f.name for f in reader.files_load())

        assert names == ["eg-button", "eg-button-literal", "eg-button-module"]

    def test_module_without_export(self, templates):
        with pytest.raises(TemplateFileError, match="must define 'default'"):
            FileReader("eg-no-export.py", root=templates).files_load()

    def test_module_import_failure(self, templates):
        (templates / "broken.py").write_text("raise RuntimeError('boom')\n", encoding="utf-8")

        with pytest.raises(TemplateFileError, match="boom"):
            FileReader("broken.py", root=templates).files_load()

    def test_unknown_extension(self, templates):
        with pytest.raises(TemplateFileError, match="eg-poop-template.poop"):
            FileReader("*.poop", root=templates).files_load()

    def test_alternative_extension(self, templates):
        files = FileReader("*.poop", html_extensions=[".poop"], root=templates).files_load()

        assert [f.name for f in files] == ["eg-poop-template"]

    def test_whitelist_adds_unmatched_files(self, templates):
        reader = FileReader(
            ["*.html", "*.py"],
            blacklist=["eg-no-export.py"],
            whitelist=["*.poop"],
            html_extensions=[".html", ".poop"],
            root=templates,
        )
        names = [f.name for f in reader.files_load()]

        assert "eg-poop-template" in names
        assert names[-1] == "eg-poop-template"

    def test_whitelist_overrides_blacklist(self, templates):
        reader = FileReader(
            "*.html", blacklist=["*.html"], whitelist=["eg-button.html"], root=templates
        )
        assert [f.name for f in reader.files_load()] == ["eg-button"]

    def test_whitelist_does_not_double_load(self, templates):
        reader = FileReader(
            ["*.html", "*.py"],
            blacklist=["eg-no-export.py"],
            whitelist=["eg-button-*.py"],
            root=templates,
        )
        assert len(reader.files_load()) == 3

    def test_recursive_glob(self, templates):
        nested = templates / "components" / "forms"
        nested.mkdir(parents=True)
        (nested / "input.html").write_text("<input>", encoding="utf-8")

        names = sorted(f.name for f in FileReader("**/*.html", root=templates).files_load())

        assert names == ["eg-button", "input"]

    def test_blacklist_single_string(self, templates):
        drafts = templates / "drafts"
        drafts.mkdir()
        (drafts / "wip.html").write_text("<p>", encoding="utf-8")

        reader = FileReader("**/*.html", blacklist="drafts/**", root=templates)

        assert [f.name for f in reader.files_load()] == ["eg-button"]

    def test_blacklist_directory_glob(self, templates):
        drafts = templates / "drafts"
        drafts.mkdir()
        (drafts / "wip.html").write_text("<p>", encoding="utf-8")

        reader = FileReader("**/*.html", blacklist=["**/drafts/**"], root=templates)

        assert [f.name for f in reader.files_load()] == ["eg-button"]

    def test_pycache_always_ignored(self, templates):
        cache = templates / "__pycache__"
        cache.mkdir()
        (cache / "stale.html").write_text("<p>", encoding="utf-8")

        names = [f.name for f in FileReader("**/*.html", root=templates).files_load()]

        assert "stale" not in names

    def test_directories_skipped(self, templates):
        (templates / "folder.html").mkdir()

        names = [f.name for f in FileReader("*.html", root=templates).files_load()]

        assert names == ["eg-button"]

    def test_no_matches(self, templates):
        assert FileReader("*.missing", root=templates).files_load() == []


class TestTemplateFile:

    def test_resolve_string(self):
        assert TemplateFile(name="t", content="<p>").text_resolve() == "<p>"

    def test_resolve_callable(self):
        assert TemplateFile(name="t", content=lambda: "<p>").text_resolve() == "<p>"

    def test_callable_resolved_once(self):
        calls = []

        def render():
            calls.append(1)
            return "<p>"

        template = TemplateFile(name="t", content=render)

        assert template.text_resolve() == "<p>"
        assert template.text_resolve() == "<p>"
        assert len(calls) == 1

    def test_key_defaults_to_name(self):
        assert TemplateFile(name="t", content="<p>").key_get() == "t"
        assert TemplateFile(name="t", content="<p>", key="a/t.html").key_get() == "a/t.html"

    def test_resolve_non_string(self):
        with pytest.raises(InvalidInputError):
            TemplateFile(name="t", content=lambda: 3).text_resolve()
