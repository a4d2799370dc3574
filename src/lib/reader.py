"""
Template file discovery and loading

Finds template files from glob patterns, applies the blacklist and
whitelist, and reads each file according to its extension:
- HTML extensions: the file is read as UTF-8 template text
- Module extensions: the file is imported as a Python module and its
  `default` attribute (a string, or a zero-argument function returning
  one) is the template

Any other extension is rejected. Each file becomes a TemplateFile named
after its base file name without the extension.

Example:
    >>> reader = FileReader("components/**/*.html", blacklist=["**/drafts/**"])
    >>> [t.name for t in reader.files_load()]
    ['button', 'card']
"""

import fnmatch
import glob
import hashlib
import importlib.util
from pathlib import Path
from typing import Any, List, Union

from ..config import appsettings, extensions_normalize
from ..models.templates import TemplateContent, TemplateFile
from .errors import TemplateFileError
from .log import LOG


def strings_listify(value: Union[str, List[str], None]) -> List[str]:
    """A single string becomes a one-item list; None becomes an empty one"""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class FileReader:
    """
    Loads template files matched by one or more glob patterns

    Attributes:
        path: Glob patterns of template files (always a list)
        blacklist: Globs of files to leave out
        whitelist: Globs of files to add even if blacklisted or unmatched
        html_extensions: Extensions read as HTML text
        module_extensions: Extensions imported as template modules
        root: Directory the globs are relative to
    """

    def __init__(
        self,
        path: Union[str, List[str]],
        blacklist: Union[str, List[str], None] = None,
        whitelist: Union[str, List[str], None] = None,
        html_extensions: Union[str, List[str], None] = None,
        module_extensions: Union[str, List[str], None] = None,
        root: Union[str, Path, None] = None,
    ) -> None:
        self.path: List[str] = strings_listify(path)
        self.blacklist: List[str] = strings_listify(blacklist)
        self.whitelist: List[str] = strings_listify(whitelist)
        self.html_extensions: List[str] = extensions_normalize(
            strings_listify(html_extensions) or appsettings.html_extensions
        )
        self.module_extensions: List[str] = extensions_normalize(
            strings_listify(module_extensions) or appsettings.module_extensions
        )
        self.root: Path = Path(root) if root is not None else Path.cwd()

    def ignoredGlobs_get(self) -> List[str]:
        """Blacklist plus the globs that are always ignored"""
        return [*self.blacklist, *appsettings.ignore_globs]

    def path_isIgnored(self, name: str, ignored: List[str]) -> bool:
        """
        Check a root-relative POSIX path against ignore globs

        A leading **/ also matches files directly under the root.
        """
        for pattern in ignored:
            if fnmatch.fnmatchcase(name, pattern):
                return True
            if pattern.startswith("**/") and fnmatch.fnmatchcase(name, pattern[3:]):
                return True
        return False

    def glob_expand(self, patterns: List[str], ignored: List[str]) -> List[str]:
        """
        Expand glob patterns into root-relative file names

        Directories and ignored files are dropped; order is first match
        first, without duplicates.
        """
        names: List[str] = []

        for pattern in patterns:
            for match in sorted(glob.glob(pattern, root_dir=self.root, recursive=True)):
                name: str = Path(match).as_posix()
                if not (self.root / match).is_file():
                    continue
                if self.path_isIgnored(name, ignored):
                    continue
                if name not in names:
                    names.append(name)

        return names

    def fileNames_get(self) -> List[str]:
        """Matched file names with whitelisted files appended"""
        names: List[str] = self.glob_expand(self.path, self.ignoredGlobs_get())

        for name in self.glob_expand(self.whitelist, list(appsettings.ignore_globs)):
            if name not in names:
                names.append(name)

        return names

    def html_is(self, name: str) -> bool:
        return any(name.endswith(extension) for extension in self.html_extensions)

    def module_is(self, name: str) -> bool:
        return any(name.endswith(extension) for extension in self.module_extensions)

    def html_process(self, file_path: Path) -> str:
        """Read an HTML template file as UTF-8 text"""
        return file_path.read_text(encoding="utf-8")

    def module_process(self, file_path: Path) -> TemplateContent:
        """
        Import a template module and return its template export

        Raises:
            TemplateFileError: If the module cannot be imported or has no
                               (or an unusable) template export
        """
        export: str = appsettings.module_export

        # Unique module name per path so same-named templates don't collide
        digest: str = hashlib.sha1(str(file_path.resolve()).encode("utf-8")).hexdigest()[:12]
        spec = importlib.util.spec_from_file_location(
            f"ovus_template_{file_path.stem.replace('-', '_')}_{digest}", file_path
        )
        if spec is None or spec.loader is None:
            raise TemplateFileError(f"Cannot import template module: \"{file_path}\".")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise TemplateFileError(
                f"Failed to import template module \"{file_path}\": {e}"
            ) from e

        content: Any = getattr(module, export, None)
        if content is None:
            raise TemplateFileError(
                f"Ovus module template file must define '{export}', which ovus uses "
                f"for the template. Problem file: \"{file_path}\"."
            )
        if not isinstance(content, str) and not callable(content):
            raise TemplateFileError(
                f"'{export}' in \"{file_path}\" must be a string or a function "
                f"returning one, got {type(content).__name__}."
            )
        return content

    def files_load(self) -> List[TemplateFile]:
        """
        Find and read every template file

        Returns:
            One TemplateFile per matched file, in match order

        Raises:
            TemplateFileError: On a file with an unrecognised extension or
                               a bad template module
            OSError: On file reading errors
        """
        files: List[TemplateFile] = []

        for name in self.fileNames_get():
            file_path: Path = self.root / name

            if self.html_is(name):
                content: TemplateContent = self.html_process(file_path)
            elif self.module_is(name):
                content = self.module_process(file_path)
            else:
                raise TemplateFileError(
                    "Ovus template file must end with either "
                    f"\"{', '.join(self.html_extensions)}\" for HTML templates or "
                    f"\"{', '.join(self.module_extensions)}\" for module templates. "
                    f"Tried to read file \"{name}\". "
                    "If this is actually a template file, change the path, blacklist, "
                    "whitelist, htmlExtensions or moduleExtensions options."
                )

            LOG(f"Loaded template file {name}", level=3)
            files.append(TemplateFile(
                name=appsettings.templateName_make(file_path),
                content=content,
                path=file_path,
                key=name,
            ))

        LOG(f"Loaded {len(files)} template files", level=2)
        return files
