"""Provides the :class:`Resolver` class, which maps identifiers to note files."""

import logging
import os.path
from collections import namedtuple
from typing import Iterator, Optional, Set

from zkdir.codec import FilenameCodec
from zkdir.conf import ZkConf
from zkdir.errors import MalformedFilename, NoteNotFound, NotAZkFile
from zkdir.repos.base import Repo


logger = logging.getLogger(__name__)

NoteEntry = namedtuple('NoteEntry', ['path', 'identifier', 'title'])


class Resolver:
    """Finds notes in the directory by identifier, and extracts identifiers and titles from note paths.

    There is no index: every lookup lists the directory again through the :class:`zkdir.repos.base.Repo`.
    """
    def __init__(self, conf: ZkConf, repo: Repo, codec: FilenameCodec = None):
        self.conf = conf
        self.repo = repo
        self.codec = codec or FilenameCodec(conf)

    def notes(self) -> Iterator[NoteEntry]:
        """Yields every note in the directory.

        Files that have the note extension but no identifier are logged and skipped.
        """
        for path in self.repo.list_files():
            try:
                identifier, title = self.codec.decode(path)
            except MalformedFilename:
                logger.warning('Skipping file without an identifier: %s', path)
                continue
            yield NoteEntry(path, identifier, title)

    def identifiers(self) -> Set[str]:
        return {note.identifier for note in self.notes()}

    def resolve(self, identifier: str) -> str:
        """Returns the path of the note with the given identifier.

        Raises :exc:`zkdir.errors.NoteNotFound` if there is none. If several files share the identifier,
        which should not happen, the first one in filename order is returned.
        """
        found = [note.path for note in self.notes() if note.identifier == identifier]
        if not found:
            raise NoteNotFound(identifier)
        if len(found) > 1:
            logger.warning('Identifier %s is shared by %d files, using %s', identifier, len(found), found[0])
        return found[0]

    def path_of(self, identifier: str) -> str:
        return self.resolve(identifier)

    def title_of(self, identifier: str) -> str:
        return self.codec.decode(self.resolve(identifier))[1]

    def identifier_of_active_note(self, current_directory: Optional[str], current_file_path: Optional[str]) -> str:
        """Returns the identifier of the note being edited.

        ``current_directory`` is the directory the editor considers current; if None, the directory containing
        ``current_file_path`` is used. Raises :exc:`zkdir.errors.NotAZkFile` unless that directory is the note
        directory, and :exc:`zkdir.errors.MalformedFilename` if the filename has no identifier.
        """
        if not current_file_path:
            raise NotAZkFile(None)
        path = os.path.realpath(current_file_path)
        directory = os.path.realpath(current_directory) if current_directory else os.path.dirname(path)
        if not (directory == self.conf.directory and os.path.dirname(path) == self.conf.directory):
            raise NotAZkFile(current_file_path)
        return self.codec.decode(path)[0]
