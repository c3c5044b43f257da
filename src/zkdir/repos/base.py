"""Defines the API for accessing the note directory.

The most important class is :class:`Repo`.
"""

import logging
from typing import Iterator, List, Tuple

from zkdir.models import FileEditCmd, CreateCmd, MoveCmd, ReplaceTextCmd, InsertTextCmd


logger = logging.getLogger(__name__)


class Repo:
    """Base class for repos, which are responsible for listing, searching, and changing the files of a note directory.

    Repos know nothing about identifiers or titles; that is the job of :class:`zkdir.resolver.Resolver`.
    """
    def list_files(self) -> List[str]:
        """Returns the absolute paths of all files with the configured extension, sorted by filename.

        Raises an IO-related exception if the directory cannot be listed.
        """
        raise NotImplementedError()

    def read_text(self, path: str) -> str:
        """Returns the contents of the file."""
        raise NotImplementedError()

    def search(self, pattern: str) -> List[str]:
        """Returns the paths of files whose contents contain the pattern.

        The pattern is a fixed string (not a regex) and is matched case-insensitively.
        Results are in the same order as :meth:`list_files`.
        """
        raise NotImplementedError()

    def change(self, edits: List[FileEditCmd]) -> None:
        """Applies the specified edits in order, as a single unit.

        If any edit fails, the edits already applied are undone before the exception propagates.
        """
        raise NotImplementedError()

    def texts(self) -> Iterator[Tuple[str, str]]:
        """Yields ``(path, contents)`` for every file in :meth:`list_files`.

        Files that are not valid UTF-8 are logged and skipped.
        """
        for path in self.list_files():
            try:
                text = self.read_text(path)
            except UnicodeDecodeError as e:
                logger.warning('Skipping file that is not valid UTF-8: %s (%s)', path, e)
                continue
            yield path, text

    def close(self) -> None:
        """Release any resources associated with the repo. Should be called when you're done with an instance."""
        pass

    def create(self, path: str, contents: str) -> None:
        """Convenience method equivalent to calling change with one :class:`zkdir.models.CreateCmd`"""
        self.change([CreateCmd(path, contents)])

    def move(self, path: str, dest: str) -> None:
        """Convenience method equivalent to calling change with one :class:`zkdir.models.MoveCmd`"""
        self.change([MoveCmd(path, dest)])

    def replace_text(self, path: str, original: str, replacement: str) -> None:
        """Convenience method equivalent to calling change with one :class:`zkdir.models.ReplaceTextCmd`"""
        self.change([ReplaceTextCmd(path, original, replacement)])

    def insert_text(self, path: str, offset: int, text: str) -> None:
        """Convenience method equivalent to calling change with one :class:`zkdir.models.InsertTextCmd`"""
        self.change([InsertTextCmd(path, offset, text)])


def apply_replace(text: str, edit: ReplaceTextCmd) -> str:
    if not edit.original or edit.original == edit.replacement:
        return text
    if edit.first_line_only:
        head, sep, rest = text.partition('\n')
        return head.replace(edit.original, edit.replacement) + sep + rest
    return text.replace(edit.original, edit.replacement)


def apply_insert(text: str, edit: InsertTextCmd) -> str:
    offset = max(0, min(edit.offset, len(text)))
    return text[:offset] + edit.text + text[offset:]
