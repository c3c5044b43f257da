"""Provides the :class:`IdAllocator` class, which assigns identifiers to new notes."""

from datetime import datetime
import logging
from typing import Callable, Iterable, Set

import shortuuid

from zkdir.codec import FilenameCodec
from zkdir.conf import ZkConf


logger = logging.getLogger(__name__)


class IdAllocator:
    """Produces identifiers that no note in the directory carries yet.

    A new identifier is the current time formatted with :attr:`zkdir.conf.ZkConf.id_format`. If that is taken,
    numeric identifiers are incremented until a free one is found; other identifiers get a short random suffix.

    ``existing`` is called on every allocation and should return the identifiers currently in use, typically
    :meth:`zkdir.resolver.Resolver.identifiers`. Identifiers handed out by this instance are remembered as well,
    so consecutive calls never return the same value even if the files have not been written yet.

    There is no locking; two processes allocating at the same moment can receive the same identifier.
    """
    def __init__(self, conf: ZkConf, existing: Callable[[], Iterable[str]], codec: FilenameCodec = None):
        self.conf = conf
        self.existing = existing
        self.codec = codec or FilenameCodec(conf)
        self.issued: Set[str] = set()

    def candidate(self) -> str:
        return datetime.now().strftime(self.conf.id_format)

    def allocate(self) -> str:
        taken = set(self.existing()) | self.issued
        candidate = self.candidate()
        if candidate.isdigit():
            width = len(candidate)
            while candidate in taken:
                logger.debug('Identifier %s is taken', candidate)
                candidate = str(int(candidate) + 1).zfill(width)
        else:
            base = candidate
            while candidate in taken:
                logger.debug('Identifier %s is taken', candidate)
                candidate = f'{base}-{shortuuid.uuid()[:8]}'
        if not self.codec.is_identifier(candidate):
            raise ValueError(f'Allocated identifier {candidate!r} does not match id_pattern {self.conf.id_pattern!r}; '
                             'check id_format and id_pattern in your configuration')
        self.issued.add(candidate)
        logger.debug('Allocated identifier %s', candidate)
        return candidate
