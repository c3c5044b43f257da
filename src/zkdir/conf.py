from __future__ import annotations
from dataclasses import dataclass, replace
import os.path
from typing import Callable, Optional
from zkdir.models import RenameScope


DEFAULT_NEW_NOTE_TEMPLATE = """\
# ${' '.join(filter(None, (identifier, title)))}
===
% if backlink:
<- ${backlink}
% endif
${body}"""


def default_ignore(parentpath: str, filename: str) -> bool:
    return filename.startswith('.') or filename.endswith('.icloud')


@dataclass(frozen=True)
class ZkConf:
    """Configures a note directory. Instances are immutable; use :func:`dataclasses.replace` to derive variants.

    Typically an instance is assigned to the variable ``conf`` in ``~/.zkdir.conf.py``:

    .. code-block:: python

       from zkdir.conf import *
       conf = ZkConf(directory='~/zettels', extension='md')
    """

    directory: str
    """The folder containing the notes. Notes are not searched for in subfolders."""

    extension: str = 'txt'
    """File extension of notes, without the leading period. Files with other extensions are not notes."""

    id_format: str = '%Y%m%d%H%M'
    """A :func:`time.strftime` format used to derive new identifiers from the current time.

    The allocator resolves collisions by incrementing the identifier as an integer, which only works when this
    format produces digits only. For other formats, a short random suffix is appended instead, so
    :attr:`id_pattern` has to allow for it.
    """

    id_pattern: str = r'\d{12}'
    """Regular expression that every identifier fully matches."""

    tag_pattern: str = r'#[a-zA-Z0-9_-]+'
    """Regular expression for tags in note bodies."""

    link_format: str = '[[%s]]'
    """How links are written. ``%s`` is replaced with the identifier."""

    default_backlink: Optional[str] = None
    """Identifier of a note that new notes should link back to when they are not created from another note."""

    rename_scope: RenameScope = RenameScope.ALL
    """Which occurrences of the old title are replaced in the body of a renamed note."""

    new_note_template: str = DEFAULT_NEW_NOTE_TEMPLATE
    """Mako template for the contents of new notes.

    The template namespace contains ``identifier``, ``title``, ``body``, ``backlink`` (a formatted link, or None),
    and ``zk`` (the :class:`zkdir.api.Zk` instance).
    """

    search_backend: str = 'direct'
    """Either ``direct`` (read every note in-process) or ``grep`` (run the external ``grep`` program)."""

    ignore: Callable[[str, str], bool] = default_ignore
    """Indicates files in the note directory that should never be treated as notes.

    The first argument is the note directory, the second is the filename.
    The default ignores hidden files and ``.icloud`` placeholders.
    """

    preview_mode: bool = False
    """If True, commands that would change notes instead print a list of the changes to the console.

    Instead of setting this in your ``.zkdir.conf.py``, you can pass ``--preview`` to relevant commands.
    """

    @classmethod
    def for_user(cls) -> ZkConf:
        path = os.path.expanduser(os.path.join('~', '.zkdir.conf.py'))
        if not os.path.exists(path):
            raise Exception(f'You need to create the config file: {path}')
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Exception('You need to assign an instance of ZkConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self) -> ZkConf:
        return replace(
            self,
            directory=os.path.realpath(os.path.expanduser(self.directory)),
            extension=self.extension.lstrip('.')
        )

    def repo(self):
        if self.search_backend == 'grep':
            from zkdir.repos.grep import GrepRepo
            return GrepRepo(self)
        elif self.search_backend == 'direct':
            from zkdir.repos.direct import DirectRepo
            return DirectRepo(self)
        raise ValueError(f'Unknown search_backend: {self.search_backend}')

    def instantiate(self):
        from zkdir.api import Zk
        return Zk(self.standardize())
