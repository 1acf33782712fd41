"""Content-level exception types.

Convention:
- ``ContentError`` and its subclasses describe problems with a single source
  file (bad front matter, bad dates, missing fields, paths that escape the
  content directory).  They subclass ``ValueError`` and carry the offending
  path so the build can record them in its report and move on to the next
  file.
- ``RenderError`` (in ``pagesmith.rendering.renderer``) is raised when a page
  cannot be turned into an output document.
"""

from __future__ import annotations


class ContentError(ValueError):
    """Raised when a content file cannot be turned into a Page."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"{self.path}: {message}"
        return message


class MalformedFrontMatter(ContentError):
    """The file does not start with a well-formed ``---`` delimited block."""


class InvalidDate(ContentError):
    """A date value could not be parsed as a timestamp."""


class UnsafePath(ContentError):
    """The file resolves outside the content directory, e.g. through a symlink."""


class MissingRequiredField(ContentError):
    """A field required for the page kind is absent."""

    def __init__(self, field: str, path: str = "") -> None:
        super().__init__(f"Missing required field '{field}'", path)
        self.field = field
