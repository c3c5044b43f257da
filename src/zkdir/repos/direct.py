"""Provides the :class:`DirectRepo` class."""

import logging
import os
import os.path
import stat
from tempfile import mkstemp
from typing import Callable, List

from zkdir.conf import ZkConf
from zkdir.models import FileEditCmd, CreateCmd, MoveCmd, ReplaceTextCmd, InsertTextCmd
from zkdir.repos.base import Repo, apply_replace, apply_insert


logger = logging.getLogger(__name__)

UndoFn = Callable[[], None]


def _noop():
    pass


def write_atomic(path: str, text: str) -> None:
    """Replaces the contents of the file by writing a temporary file next to it and renaming it into place."""
    dirname, basename = os.path.split(path)
    fd, tmp = mkstemp(prefix=f'.{basename}.', dir=dirname)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as file:
            file.write(text)
        if os.path.exists(path):
            os.chmod(tmp, stat.S_IMODE(os.stat(path).st_mode))
        os.replace(tmp, path)
    except Exception:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


class DirectRepo(Repo):
    """Accesses notes directly on the filesystem without any caching.

    Searching reads every note in the directory. For large directories, :class:`zkdir.repos.grep.GrepRepo` hands
    the search to the ``grep`` program instead.

    .. attribute:: conf
       :type: ZkConf
    """
    def __init__(self, conf: ZkConf):
        self.conf = conf
        if not conf.directory:
            raise ValueError('`directory` must be set in ZkConf.')
        self.suffix = f'.{conf.extension}'

    def list_files(self) -> List[str]:
        paths = []
        for entry in os.scandir(self.conf.directory):
            if self.conf.ignore(self.conf.directory, entry.name):
                continue
            if not entry.name.endswith(self.suffix) or not entry.is_file():
                continue
            paths.append(os.path.join(self.conf.directory, entry.name))
        paths.sort(key=os.path.basename)
        return paths

    def read_text(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8') as file:
            return file.read()

    def search(self, pattern: str) -> List[str]:
        needle = pattern.casefold()
        return [path for path, text in self.texts() if needle in text.casefold()]

    def change(self, edits: List[FileEditCmd]) -> None:
        if self.conf.preview_mode:
            for edit in edits:
                print(edit)
            return

        undo = []
        try:
            for edit in edits:
                undo.append(self._apply(edit))
        except Exception:
            logger.warning('Rolling back %d applied edit(s) after failure', len(undo))
            for fn in reversed(undo):
                try:
                    fn()
                except OSError:
                    logger.exception('Could not roll back edit')
            raise

    def _apply(self, edit: FileEditCmd) -> UndoFn:
        if isinstance(edit, CreateCmd):
            with open(edit.path, 'x', encoding='utf-8') as file:
                file.write(edit.contents)
            logger.info('Created %s', edit.path)
            return lambda: os.remove(edit.path)
        elif isinstance(edit, MoveCmd):
            if edit.path == edit.dest:
                return _noop
            if os.path.exists(edit.dest):
                raise FileExistsError(f'File already exists: {edit.dest}')
            os.rename(edit.path, edit.dest)
            logger.info('Moved %s to %s', edit.path, edit.dest)
            return lambda: os.rename(edit.dest, edit.path)
        elif isinstance(edit, (ReplaceTextCmd, InsertTextCmd)):
            original = self.read_text(edit.path)
            if isinstance(edit, ReplaceTextCmd):
                text = apply_replace(original, edit)
            else:
                text = apply_insert(original, edit)
            if text == original:
                return _noop
            write_atomic(edit.path, text)
            logger.info('Updated %s', edit.path)
            return lambda: write_atomic(edit.path, original)
        raise ValueError(f'Unsupported edit: {edit}')
