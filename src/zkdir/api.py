"""Provides the main entry point for using the library, :class:`Zk`"""

from __future__ import annotations
import logging
import os.path
from typing import List, Optional

from mako.template import Template

from zkdir.allocator import IdAllocator
from zkdir.codec import FilenameCodec
from zkdir.conf import ZkConf
from zkdir.errors import Error, NoSearchResults, NoteNotFound, NoIdentifierAtCursor, NotAZkFile
from zkdir.grammar import LinkGrammar
from zkdir.interact import Chooser
from zkdir.models import NoteInfo, NoteInfoReq, NoteInfoReqIsh, CreateCmd, MoveCmd, ReplaceTextCmd, InsertTextCmd,\
    RenameScope
from zkdir.resolver import Resolver


logger = logging.getLogger(__name__)


class Zk:
    """Main entry point for working programmatically with a note directory.

    Generally, you should get an instance using the :meth:`Zk.for_user` method. Call :meth:`close` when you're
    done with it, or else use it as a context manager.

    .. attribute:: conf
       :type: zkdir.conf.ZkConf

    .. attribute:: repo
       :type: zkdir.repos.base.Repo

    .. attribute:: resolver
       :type: zkdir.resolver.Resolver

    Here's an example that creates a note linking back to an existing one and prints its backlinks:

    .. code-block:: python

       from zkdir.api import Zk
       with Zk.for_user() as zk:
           path = zk.new('Follow-up', origin=zk.resolver.resolve('202012091130'))
           print(zk.backlinks('202012091130'))
    """

    @staticmethod
    def for_user() -> Zk:
        """Creates an instance using the user's ``~/.zkdir.conf.py`` file.

        Raises :exc:`Exception` if it does not exist or does not define configuration.
        """
        return ZkConf.for_user().instantiate()

    def __init__(self, conf: ZkConf):
        self.conf = conf
        self.repo = conf.repo()
        self.codec = FilenameCodec(conf)
        self.grammar = LinkGrammar(conf)
        self.resolver = Resolver(conf, self.repo, self.codec)
        self.allocator = IdAllocator(conf, self.resolver.identifiers, self.codec)

    def identifier_for(self, id_or_path: str) -> str:
        """Returns the argument if it is an identifier, or else the identifier of the note at that path."""
        if self.codec.is_identifier(id_or_path):
            return id_or_path
        return self.resolver.identifier_of_active_note(None, id_or_path)

    def _backlink(self, origin: Optional[str]) -> Optional[str]:
        if origin:
            try:
                identifier = self.resolver.identifier_of_active_note(None, origin)
                return self.grammar.format_link_with_title(self.codec.decode(origin)[1], identifier)
            except Error as e:
                logger.debug('Not linking back to %s: %s', origin, e)
        if self.conf.default_backlink:
            identifier = self.conf.default_backlink
            try:
                return self.grammar.format_link_with_title(self.resolver.title_of(identifier), identifier)
            except NoteNotFound:
                logger.debug('Default backlink %s does not resolve, linking without title', identifier)
                return self.grammar.format_link(identifier)
        return None

    def new(self, title: Optional[str] = None, selection: Optional[str] = None, origin: Optional[str] = None,
            body: Optional[str] = None) -> str:
        """Creates a new note and returns its path.

        If ``selection`` is given, its first line becomes the title (unless ``title`` is also given) and everything
        from its third line on becomes the body (unless ``body`` is also given). The second line is skipped, since
        text selected from another note usually has a separator there.

        If ``origin`` is the path of a note, the new note links back to it. Otherwise, if
        :attr:`zkdir.conf.ZkConf.default_backlink` is set, the new note links back to that identifier.
        Failing both, no backlink is added.

        Surrounding whitespace is removed from the title.

        The contents are rendered from :attr:`zkdir.conf.ZkConf.new_note_template`.
        """
        if selection is not None:
            lines = selection.split('\n')
            if title is None:
                title = lines[0]
            if body is None:
                body = '\n'.join(lines[2:])
        title = self.codec.check_title((title or '').strip())
        backlink = self._backlink(origin)
        identifier = self.allocator.allocate()
        template = Template(text=self.conf.new_note_template)
        contents = template.render(identifier=identifier, title=title, body=body or '', backlink=backlink, zk=self)
        path = os.path.join(self.conf.directory, self.codec.encode(identifier, title))
        self.repo.change([CreateCmd(path, contents=contents)])
        return path

    def rename(self, path: str, title: str) -> str:
        """Changes the title of the note at the given path and returns its new path.

        The identifier is kept. Occurrences of the old title in the note's own text are replaced with the new title:
        all of them, or only those on the first line if :attr:`zkdir.conf.ZkConf.rename_scope` is
        :attr:`zkdir.models.RenameScope.HEADER`. No other notes are changed, since links only contain identifiers.
        """
        identifier = self.resolver.identifier_of_active_note(None, path)
        src = os.path.realpath(path)
        if not self.codec.is_note_filename(src):
            raise NotAZkFile(path)
        old_title = self.codec.decode(src)[1]
        new_title = self.codec.check_title(title.strip())
        dest = os.path.join(self.conf.directory, self.codec.encode(identifier, new_title))
        if src == dest:
            return src
        edits = []
        if old_title:
            edits.append(ReplaceTextCmd(src, old_title, new_title,
                                        first_line_only=self.conf.rename_scope == RenameScope.HEADER))
        edits.append(MoveCmd(src, dest))
        self.repo.change(edits)
        return dest

    def follow(self, text: str, offset: int) -> str:
        """Returns the path of the note whose identifier appears at the given offset in the text."""
        identifier = self.grammar.find_identifier_at(text, offset)
        if not identifier:
            raise NoIdentifierAtCursor(offset)
        return self.resolver.resolve(identifier)

    def follow_in_file(self, path: str, offset: int) -> str:
        return self.follow(self.repo.read_text(path), offset)

    def backlinks(self, identifier: str) -> List[str]:
        """Returns the paths of notes that mention the identifier, excluding the note itself.

        Raises :exc:`zkdir.errors.NoSearchResults` if there are none.
        """
        own = os.path.realpath(self.resolver.resolve(identifier))
        results = [p for p in self.repo.search(identifier) if not os.path.realpath(p) == own]
        if not results:
            raise NoSearchResults(identifier)
        return results

    def choose_backlink(self, identifier: str, chooser: Chooser) -> Optional[str]:
        return chooser.choose('Backlink', self.backlinks(identifier))

    def search(self, term: str) -> List[str]:
        """Returns the paths of notes containing the term, ignoring case.

        Raises :exc:`zkdir.errors.NoSearchResults` if there are none.
        """
        results = self.repo.search(term)
        if not results:
            raise NoSearchResults(term)
        return results

    def search_tag(self, tag: str) -> List[str]:
        return self.search(tag)

    def tags(self) -> List[str]:
        """Returns every tag used in any note, lower-cased and sorted."""
        found = set()
        for _, text in self.repo.texts():
            found.update(self.grammar.extract_all_tags(text))
        return sorted(found)

    def choose_tag(self, chooser: Chooser) -> Optional[str]:
        return chooser.choose('Tag', self.tags())

    def insert_tag(self, path: str, offset: int, tag: str) -> None:
        self.repo.change([InsertTextCmd(path, offset, tag)])

    def link(self, identifier: str, with_title: bool = False) -> str:
        """Formats a link to the identifier. The target is only looked up when its title is wanted."""
        if with_title:
            return self.grammar.format_link_with_title(self.resolver.title_of(identifier), identifier)
        return self.grammar.format_link(identifier)

    def insert_link(self, path: str, offset: int, identifier: str, with_title: bool = False) -> None:
        self.repo.change([InsertTextCmd(path, offset, self.link(identifier, with_title))])

    def info(self, id_or_path: str, fields: NoteInfoReqIsh = NoteInfoReq.internal()) -> NoteInfo:
        """Looks up the specified fields for the note with the given identifier or path.

        Raises :exc:`zkdir.errors.NoteNotFound` if there is no such note.
        """
        fields = NoteInfoReq.parse(fields)
        identifier = self.identifier_for(id_or_path)
        path = self.resolver.resolve(identifier)
        info = NoteInfo(path, identifier, self.codec.decode(path)[1])
        if fields.tags or fields.links:
            text = self.repo.read_text(path)
            if fields.tags:
                info.tags = self.grammar.extract_all_tags(text)
            if fields.links:
                info.links = self.grammar.extract_all_identifiers(text)
        if fields.backlinks:
            try:
                info.backlinks = self.backlinks(identifier)
            except NoSearchResults:
                info.backlinks = []
        return info

    def list_notes(self) -> List[NoteInfo]:
        """Returns the path, identifier and title of every note, sorted by identifier."""
        infos = [NoteInfo(n.path, n.identifier, n.title) for n in self.resolver.notes()]
        infos.sort(key=lambda info: info.identifier)
        return infos

    def close(self):
        """Closes the associated repo and releases any other resources."""
        self.repo.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.close()
