"""Command-line interface for zkdir."""


import argparse
import dataclasses
from dataclasses import replace
import json
import logging
import os.path
import sys
from terminaltables import AsciiTable
from zkdir.api import Zk
from zkdir.conf import ZkConf
from zkdir.errors import Error
from zkdir.interact import EditorOpener, PrintOpener, PromptChooser
from zkdir.models import NoteInfo, NoteInfoReq


def _print_note_info(info: NoteInfo, fields: NoteInfoReq) -> None:
    if fields.path:
        print(f'path: {info.path}')
    if fields.identifier:
        print(f'identifier: {info.identifier}')
    if fields.title:
        print(f'title: {info.title}')
    if fields.tags:
        print(f'tags: {", ".join(sorted(info.tags))}')
    if fields.links:
        print('links:')
        for identifier in info.links:
            print(f'\t{identifier}')
    if fields.backlinks:
        print('backlinks:')
        for path in info.backlinks:
            print(f'\t{path}')


def _opener(args):
    return EditorOpener() if args.edit else PrintOpener()


def _print_paths(args, paths) -> None:
    if args.json:
        print(json.dumps(paths))
    else:
        for path in paths:
            print(path)


def _new(args, zk: Zk) -> int:
    selection = sys.stdin.read() if args.selection else None
    path = zk.new(title=args.title[0] if args.title else None, selection=selection,
                  origin=args.origin[0] if args.origin else None)
    if not args.preview:
        print(f'Created {path}')
        if args.edit:
            EditorOpener().open(path)
    return 0


def _rename(args, zk: Zk) -> int:
    src = args.path[0]
    dest = zk.rename(src, args.title[0])
    if not args.preview and not os.path.realpath(src) == dest:
        print(f'Renamed {src} to {dest}')
    return 0


def _resolve(args, zk: Zk) -> int:
    identifier = args.identifier[0]
    print(zk.resolver.title_of(identifier) if args.title else zk.resolver.resolve(identifier))
    return 0


def _follow(args, zk: Zk) -> int:
    path = zk.follow_in_file(args.path[0], args.offset[0])
    _opener(args).open(path)
    return 0


def _backlinks(args, zk: Zk) -> int:
    identifier = zk.identifier_for(args.note[0])
    if args.choose:
        path = zk.choose_backlink(identifier, PromptChooser())
        if path:
            _opener(args).open(path)
        return 0
    _print_paths(args, zk.backlinks(identifier))
    return 0


def _tags(args, zk: Zk) -> int:
    if args.choose:
        tag = zk.choose_tag(PromptChooser())
        if tag:
            _print_paths(args, zk.search_tag(tag))
        return 0
    tags = zk.tags()
    if args.json:
        print(json.dumps(tags))
    else:
        for tag in tags:
            print(tag)
    return 0


def _search(args, zk: Zk) -> int:
    _print_paths(args, zk.search(args.term[0]))
    return 0


def _insert_tag(args, zk: Zk) -> int:
    tag = args.tag or zk.choose_tag(PromptChooser())
    if tag:
        zk.insert_tag(args.path[0], args.offset[0], tag)
    return 0


def _link(args, zk: Zk) -> int:
    print(zk.link(args.identifier[0], with_title=args.title))
    return 0


def _insert_link(args, zk: Zk) -> int:
    zk.insert_link(args.path[0], args.offset[0], args.identifier[0], with_title=args.title)
    return 0


def _info(args, zk: Zk) -> int:
    fields = NoteInfoReq.parse(args.fields[0]) if args.fields else NoteInfoReq.full()
    info = zk.info(args.note[0], fields)
    if args.json:
        print(json.dumps(info.as_json()))
    else:
        _print_note_info(info, fields)
    return 0


def _list(args, zk: Zk) -> int:
    infos = zk.list_notes()
    if args.json:
        print(json.dumps([{'path': i.path, 'identifier': i.identifier, 'title': i.title} for i in infos]))
    elif args.table:
        data = [('Identifier', 'Title')] + [(i.identifier, i.title) for i in infos]
        table = AsciiTable(data)
        print(table.table)
    else:
        for info in infos:
            print(os.path.basename(info.path))
    return 0


def argparser() -> argparse.ArgumentParser:
    fields_help = f'Possible fields are: {", ".join(f.name for f in dataclasses.fields(NoteInfoReq))}.'

    parser = argparse.ArgumentParser()
    parser.set_defaults(func=None, preview=False)
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log more details to stderr. Repeat for debug output.')

    subs = parser.add_subparsers(title='Commands')

    p_new = subs.add_parser('new', help='Create a new note. Prints the path of the created file.')
    p_new.add_argument('-t', '--title', nargs=1, help='Title of the new note.')
    p_new.add_argument('-s', '--selection', action='store_true',
                       help='Read text from stdin. Its first line becomes the title, and everything from the third '
                            'line on becomes the body.')
    p_new.add_argument('-o', '--origin', nargs=1,
                       help='Path of the note you are coming from. The new note will link back to it.')
    p_new.add_argument('-e', '--edit', action='store_true', help='Open the new note in $VISUAL or $EDITOR.')
    p_new.add_argument('-p', '--preview', action='store_true', help='Print plan but do not create file')
    p_new.set_defaults(func=_new)

    p_rename = subs.add_parser(
        'rename',
        help='Change the title of a note. The identifier is kept, so links to the note stay valid. Occurrences '
             'of the old title in the note itself are replaced with the new title.')
    p_rename.add_argument('path', nargs=1)
    p_rename.add_argument('title', nargs=1)
    p_rename.add_argument('-p', '--preview', action='store_true',
                          help='Print changes to be made but do not change files')
    p_rename.set_defaults(func=_rename)

    p_resolve = subs.add_parser('resolve', help='Print the path of the note with the given identifier.')
    p_resolve.add_argument('identifier', nargs=1)
    p_resolve.add_argument('-t', '--title', action='store_true', help='Print the title instead of the path.')
    p_resolve.set_defaults(func=_resolve)

    p_follow = subs.add_parser('follow', help='Follow the link at a character offset in a file.')
    p_follow.add_argument('path', nargs=1)
    p_follow.add_argument('offset', nargs=1, type=int)
    p_follow.add_argument('-e', '--edit', action='store_true',
                          help='Open the linked note in $VISUAL or $EDITOR instead of printing its path.')
    p_follow.set_defaults(func=_follow)

    p_back = subs.add_parser('backlinks', help='List notes that mention a note\'s identifier.')
    p_back.add_argument('note', nargs=1, help='Identifier or path of the note.')
    p_back.add_argument('-c', '--choose', action='store_true', help='Pick one of the results to open.')
    p_back.add_argument('-e', '--edit', action='store_true',
                        help='With --choose, open the chosen note in $VISUAL or $EDITOR.')
    p_back.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_back.set_defaults(func=_backlinks)

    p_tags = subs.add_parser('tags', help='List all tags used in notes.')
    p_tags.add_argument('-c', '--choose', action='store_true',
                        help='Pick one of the tags and list the notes containing it.')
    p_tags.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_tags.set_defaults(func=_tags)

    p_search = subs.add_parser('search', help='List notes containing a string, ignoring case.')
    p_search.add_argument('term', nargs=1)
    p_search.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_search.set_defaults(func=_search)

    p_itag = subs.add_parser('insert-tag', help='Insert a tag at a character offset in a file.')
    p_itag.add_argument('path', nargs=1)
    p_itag.add_argument('offset', nargs=1, type=int)
    p_itag.add_argument('tag', nargs='?', help='Tag to insert. If omitted, you can pick one of the existing tags.')
    p_itag.add_argument('-p', '--preview', action='store_true',
                        help='Print changes to be made but do not change files')
    p_itag.set_defaults(func=_insert_tag)

    p_link = subs.add_parser('link', help='Print a link to the given identifier.')
    p_link.add_argument('identifier', nargs=1)
    p_link.add_argument('-t', '--title', action='store_true', help='Include the title of the linked note.')
    p_link.set_defaults(func=_link)

    p_ilink = subs.add_parser('insert-link', help='Insert a link at a character offset in a file.')
    p_ilink.add_argument('path', nargs=1)
    p_ilink.add_argument('offset', nargs=1, type=int)
    p_ilink.add_argument('identifier', nargs=1)
    p_ilink.add_argument('-t', '--title', action='store_true', help='Include the title of the linked note.')
    p_ilink.add_argument('-p', '--preview', action='store_true',
                         help='Print changes to be made but do not change files')
    p_ilink.set_defaults(func=_insert_link)

    p_info = subs.add_parser('info', help='Show info about a note, such as tags, links and backlinks.')
    p_info.add_argument('note', nargs=1, help='Identifier or path of the note.')
    p_info.add_argument('-f', '--fields', nargs=1,
                        help=f'Comma-separated list of fields to show. {fields_help} By default, all fields are shown.')
    p_info.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_info.set_defaults(func=_info)

    p_list = subs.add_parser('list', help='List all notes.')
    p_list_formats = p_list.add_mutually_exclusive_group()
    p_list_formats.add_argument('-j', '--json', help='Output as JSON.', action='store_true')
    p_list_formats.add_argument('-t', '--table', help='Format output as a table.', action='store_true')
    p_list.set_defaults(func=_list)

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s: %(name)s: %(message)s', stream=sys.stderr)


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 1
    _configure_logging(args.verbose)
    conf = ZkConf.for_user()
    if args.preview:
        conf = replace(conf, preview_mode=True)
    with conf.instantiate() as zk:
        try:
            return args.func(args, zk)
        except Error as e:
            print(e.message, file=sys.stderr)
            return 1
