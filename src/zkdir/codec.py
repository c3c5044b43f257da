"""Translates between note filenames and their (identifier, title) components.

A note's filename is ``<identifier> <title>.<extension>``, for example ``202012091130 Example.txt``.
"""

import os
import os.path
import re
from typing import Optional, Tuple

from zkdir.conf import ZkConf
from zkdir.errors import InvalidTitle, MalformedFilename


def _forbidden_title_chars():
    chars = {'/', os.sep, '\0', '\n', '\r'}
    if os.altsep:
        chars.add(os.altsep)
    return chars


class FilenameCodec:
    """Encodes and decodes note filenames according to a :class:`zkdir.conf.ZkConf`.

    Titles are stored in filenames verbatim, so they may not contain path separators or line breaks.
    They may contain periods, because decoding only strips the configured extension.
    """
    def __init__(self, conf: ZkConf):
        self.conf = conf
        self.suffix = f'.{conf.extension}'
        self._id_re = re.compile(f'(?:{conf.id_pattern})')
        self._forbidden = _forbidden_title_chars()

    def is_identifier(self, value: str) -> bool:
        return bool(value) and self._id_re.fullmatch(value) is not None

    def check_title(self, title: Optional[str]) -> str:
        """Returns the title unchanged (or ``''`` for None), or raises :exc:`InvalidTitle`."""
        title = title or ''
        bad = sorted(c for c in self._forbidden if c in title)
        if bad:
            raise InvalidTitle(title, f'contains {", ".join(repr(c) for c in bad)}')
        return title

    def encode(self, identifier: str, title: Optional[str], extension: str = None) -> str:
        if not self.is_identifier(identifier):
            raise MalformedFilename(identifier)
        title = self.check_title(title)
        suffix = f'.{extension.lstrip(".")}' if extension else self.suffix
        if title:
            return f'{identifier} {title}{suffix}'
        return f'{identifier}{suffix}'

    def decode(self, filename: str) -> Tuple[str, str]:
        """Returns the identifier and title from the given filename or path.

        Raises :exc:`MalformedFilename` if the name does not begin with an identifier followed by a space or the
        extension.
        """
        name = os.path.basename(filename)
        if name.endswith(self.suffix):
            stem = name[:-len(self.suffix)]
        else:
            stem = os.path.splitext(name)[0]
        match = self._id_re.match(stem)
        if not match or not match.group(0):
            raise MalformedFilename(filename)
        rest = stem[match.end():]
        if rest and not rest.startswith(' '):
            raise MalformedFilename(filename)
        return match.group(0), rest[1:]

    def is_note_filename(self, filename: str) -> bool:
        if not filename.endswith(self.suffix):
            return False
        try:
            self.decode(filename)
        except MalformedFilename:
            return False
        return True
