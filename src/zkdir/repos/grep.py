"""Provides the :class:`GrepRepo` class."""

import logging
import subprocess
from typing import List

from zkdir.repos.direct import DirectRepo


logger = logging.getLogger(__name__)


class GrepRepo(DirectRepo):
    """Like :class:`zkdir.repos.direct.DirectRepo`, but searches by running the external ``grep`` program.

    The program is invoked once per search, with the list of note files as arguments, so the files that are
    searched are exactly those returned by :meth:`list_files`.
    """

    grep_command = 'grep'

    def search(self, pattern: str) -> List[str]:
        paths = self.list_files()
        if not paths:
            return []
        cmd = [self.grep_command, '--files-with-matches', '--ignore-case', '--fixed-strings', '--', pattern]
        logger.debug('Running %s on %d files', ' '.join(cmd), len(paths))
        result = subprocess.run(cmd + paths, capture_output=True, text=True)
        # grep exits with 1 when nothing matched
        if result.returncode == 1:
            return []
        result.check_returncode()
        matched = set(line for line in result.stdout.splitlines() if line)
        return [p for p in paths if p in matched]
