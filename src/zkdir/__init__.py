"""Helps manage a Zettelkasten stored as a flat directory of plain-text files.

Each note is a file named ``<identifier> <title>.<extension>``, and notes link to each other with
``[[identifier]]``. There is no index or database; the directory itself is the only state.

If you installed via ``pip``, run ``zkdir -h`` to get help.

To use the Python API, look at :class:`zkdir.api.Zk`
"""
