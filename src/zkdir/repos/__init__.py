"""Handles interaction with the note directory.

:class:`zkdir.repos.base.Repo` defines an API.
:class:`zkdir.repos.direct.DirectRepo` reads files in-process, while
:class:`zkdir.repos.grep.GrepRepo` delegates searching to the ``grep`` program.
"""
