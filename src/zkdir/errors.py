"""Defines the user-facing errors raised by zkdir.

Every error here is recoverable: the operation that raised it has not changed anything in the note directory.
The command-line interface prints :attr:`Error.message` and exits with a nonzero status.
I/O failures are not wrapped; they propagate as the usual :exc:`OSError` subclasses.
"""

from typing import Optional


class Error(Exception):
    """Base class for zkdir errors that should be shown to the user."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoteNotFound(Error):
    """Raised when no file in the note directory carries the requested identifier."""
    def __init__(self, identifier: str):
        super().__init__(f'No file associated with id {identifier}')
        self.identifier = identifier


class MalformedFilename(Error):
    """Raised when a filename does not begin with a valid identifier."""
    def __init__(self, filename: str):
        super().__init__(f'Filename does not carry a note identifier: {filename}')
        self.filename = filename


class NotAZkFile(Error):
    """Raised when an operation needs a current note, but the given file is not in the note directory."""
    def __init__(self, path: Optional[str]):
        if path:
            super().__init__(f'Not a file in the note directory: {path}')
        else:
            super().__init__('No current note')
        self.path = path


class NoSearchResults(Error):
    """Raised when a search over the note directory matches nothing."""
    def __init__(self, term: str):
        super().__init__(f'No results for {term}')
        self.term = term


class InvalidTitle(Error):
    """Raised when a title cannot be encoded into a filename."""
    def __init__(self, title: str, reason: str):
        super().__init__(f'Invalid title {title!r}: {reason}')
        self.title = title
        self.reason = reason


class NoIdentifierAtCursor(Error):
    """Raised when following a link, but there is no identifier at the given offset."""
    def __init__(self, offset: int):
        super().__init__(f'No identifier at offset {offset}')
        self.offset = offset
