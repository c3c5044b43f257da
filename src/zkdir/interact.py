"""Interfaces to the user's terminal and editor.

:class:`Chooser` presents a list and returns the user's pick; :class:`Opener` shows a note to the user.
The command-line interface uses the terminal implementations below. Editor integrations can supply their own.
"""

import logging
import os
import shlex
import subprocess
import sys
from typing import Optional, Sequence, TextIO


logger = logging.getLogger(__name__)


class Chooser:
    def choose(self, prompt: str, candidates: Sequence[str]) -> Optional[str]:
        """Returns the chosen candidate, or None if the user cancelled."""
        raise NotImplementedError()


class Opener:
    def open(self, path: str) -> None:
        raise NotImplementedError()


class PromptChooser(Chooser):
    """Prints a numbered list and reads the number of the chosen entry.

    An empty line or end of input cancels.
    """
    def __init__(self, stdin: TextIO = None, stdout: TextIO = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def choose(self, prompt: str, candidates: Sequence[str]) -> Optional[str]:
        if not candidates:
            return None
        for i, candidate in enumerate(candidates, start=1):
            print(f'{i}: {candidate}', file=self.stdout)
        while True:
            print(f'{prompt} [1-{len(candidates)}]: ', end='', file=self.stdout, flush=True)
            line = self.stdin.readline().strip()
            if not line:
                return None
            if line.isdigit() and 1 <= int(line) <= len(candidates):
                return candidates[int(line) - 1]
            print(f'Please enter a number from 1 to {len(candidates)}.', file=self.stdout)


class PrintOpener(Opener):
    def __init__(self, stdout: TextIO = None):
        self.stdout = stdout or sys.stdout

    def open(self, path: str) -> None:
        print(path, file=self.stdout)


class EditorOpener(Opener):
    """Opens files in the program named by ``$VISUAL`` or ``$EDITOR``, falling back to ``vi``."""
    def __init__(self, editor: str = None):
        self.editor = editor or os.environ.get('VISUAL') or os.environ.get('EDITOR') or 'vi'

    def open(self, path: str) -> None:
        cmd = shlex.split(self.editor) + [path]
        logger.debug('Running %s', cmd)
        subprocess.run(cmd, check=True)
