"""Recognizes and formats links and tags in note text.

A link is an identifier wrapped in the configured delimiters, ``[[202012091130]]`` by default, optionally preceded
by a bracketed title: ``[Example] [[202012091130]]``. Only the identifier matters when following a link; the title
is a courtesy for the reader and is never used for lookup.

Nothing in this module checks whether an identifier belongs to an existing note.
"""

import re
from typing import List, Optional, Set

from zkdir.conf import ZkConf


class LinkGrammar:
    def __init__(self, conf: ZkConf):
        self.conf = conf
        self.id_re = re.compile(f'(?:{conf.id_pattern})')
        self.tag_re = re.compile(f'(?:{conf.tag_pattern})')
        if conf.link_format.count('%s') != 1:
            raise ValueError(f'link_format must contain %s exactly once: {conf.link_format}')
        opening, closing = conf.link_format.split('%s')
        self.link_re = re.compile(f'{re.escape(opening)}({self.id_re.pattern}){re.escape(closing)}')

    def format_link(self, identifier: str) -> str:
        return self.conf.link_format.replace('%s', identifier)

    def format_link_with_title(self, title: str, identifier: str) -> str:
        return f'[{title}] {self.format_link(identifier)}'

    def find_identifier_at(self, text: str, offset: int) -> Optional[str]:
        """Returns the identifier whose span contains or touches the offset, if any."""
        for match in self.id_re.finditer(text):
            if match.start() > offset:
                break
            if match.start() <= offset <= match.end() and match.group(0):
                return match.group(0)
        return None

    def extract_identifier(self, text: str) -> Optional[str]:
        match = self.id_re.search(text)
        return match.group(0) if match else None

    def extract_all_identifiers(self, text: str) -> List[str]:
        """Returns the identifiers of all links in the text, in order of first appearance, without duplicates."""
        seen = []
        for match in self.link_re.finditer(text):
            identifier = match.group(1)
            if identifier not in seen:
                seen.append(identifier)
        return seen

    def extract_all_tags(self, corpus: str) -> Set[str]:
        return {m.group(0).lower() for m in self.tag_re.finditer(corpus)}
