"""Defines classes for representing note details and update requests.

The most important classes are :class:`NoteInfo` and the :class:`FileEditCmd` subclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Set, Optional, Union, Iterable, List


class RenameScope(Enum):
    """Where the old title is replaced in the body of a note whose title changes."""

    ALL = 'all'
    """Every literal occurrence anywhere in the body."""

    HEADER = 'header'
    """Only occurrences on the first line."""


@dataclass
class NoteInfo:
    """Container for the details zkdir can determine about a note.

    Which fields are populated depends on the :class:`NoteInfoReq` passed when requesting the info.
    """

    path: str
    """The resolved, absolute path of the note file."""

    identifier: Optional[str] = None
    """The identifier encoded in the filename."""

    title: Optional[str] = None
    """The title encoded in the filename. May be empty."""

    tags: Set[str] = field(default_factory=set)
    """Lower-cased tags found in the body, including the leading ``#``."""

    links: List[str] = field(default_factory=list)
    """Identifiers linked to from the body, in order of first appearance."""

    backlinks: List[str] = field(default_factory=list)
    """Paths of other notes whose content mentions this note's identifier."""

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'path': self.path,
            'identifier': self.identifier,
            'title': self.title,
            'tags': sorted(self.tags),
            'links': list(self.links),
            'backlinks': list(self.backlinks)
        }


@dataclass
class NoteInfoReq:
    """Allows you to specify which attributes you want when loading note info.

    For each attribute of :class:`NoteInfo`, there is a corresponding boolean attribute here.
    The identifier and title come from the filename and are always populated.
    """

    path: bool = False
    identifier: bool = False
    title: bool = False
    tags: bool = False
    links: bool = False
    backlinks: bool = False

    @classmethod
    def parse(cls, val: NoteInfoReqIsh) -> NoteInfoReq:
        """Converts the parameter to a NoteInfoReq, if it isn't one already.

        You can pass a comma-separated string like ``"path,backlinks"`` or a list of strings like
        ``['path', 'backlinks']``. Each listed field will be set to True in the resulting NoteInfoReq.
        """
        if isinstance(val, NoteInfoReq):
            return val
        if isinstance(val, str):
            return cls.parse(s.strip() for s in val.split(',') if s.strip())
        return cls(**{k: True for k in val})

    @classmethod
    def internal(cls) -> NoteInfoReq:
        """Returns an instance that requests everything which can be determined by looking at a note in isolation."""
        return cls(path=True, identifier=True, title=True, tags=True, links=True)

    @classmethod
    def full(cls) -> NoteInfoReq:
        """Returns an instance that requests everything."""
        return replace(cls.internal(), backlinks=True)


NoteInfoReqIsh = Union[str, Iterable[str], NoteInfoReq]


@dataclass
class FileEditCmd:
    """Base class for requests to make changes to a file."""

    path: str
    """Path to the file that should be changed."""


@dataclass
class CreateCmd(FileEditCmd):
    """Represents a request to create a new file. The file must not exist yet."""

    contents: str


@dataclass
class MoveCmd(FileEditCmd):
    """Represents a request to rename a file."""

    dest: str
    """The new path and filename."""


@dataclass
class ReplaceTextCmd(FileEditCmd):
    """Represents a request to replace literal text in a file.

    All occurrences are replaced, unless :attr:`first_line_only` is set.
    """

    original: str

    replacement: str

    first_line_only: bool = False
    """If True, only occurrences on the first line of the file are replaced."""


@dataclass
class InsertTextCmd(FileEditCmd):
    """Represents a request to insert text at a character offset in a file."""

    offset: int
    """Character offset at which to insert. Offsets past the end of the file append."""

    text: str
