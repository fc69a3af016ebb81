"""Command-line interface for newt."""


import argparse
import logging
import os.path
import sys
from terminaltables import AsciiTable
from newt.conf import Config, resolve_config
from newt.env import Environment
from newt.errors import Error
from newt.invoke import edit_file, view_file
from newt.notes import first_line, list_notes, new_file_name, note_path


def _width(value: str) -> int:
    width = int(value)
    if width < 4:
        raise argparse.ArgumentTypeError(f'must be at least 4, not {width}')
    return width


def _finish(status: int, program: str) -> int:
    if status != 0:
        print(f'Warning: {program} process returned with status {status}', file=sys.stderr)
    return status


def _new(args, config: Config, env: Environment) -> int:
    notes_dir = config.notes_dir_path(env)
    name = args.name or new_file_name(notes_dir)
    return _finish(edit_file(config, env, os.path.join(notes_dir, name)), 'editor')


def _list(args, config: Config, env: Environment) -> int:
    notes_dir = config.notes_dir_path(env)
    data = [('#', 'Name', 'First line')]
    for i, name in enumerate(list_notes(notes_dir), start=1):
        data.append((str(i), name, first_line(os.path.join(notes_dir, name), args.width) or ''))
    table = AsciiTable(data)
    table.justify_columns[0] = 'right'
    print(table.table)
    return 0


def _view(args, config: Config, env: Environment) -> int:
    path = note_path(config.notes_dir_path(env), args.index)
    return _finish(view_file(config, env, path), 'pager')


def _edit(args, config: Config, env: Environment) -> int:
    path = note_path(config.notes_dir_path(env), args.index)
    return _finish(edit_file(config, env, path), 'editor')


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Quick notetaking with minimal fuss.')
    parser.set_defaults(func=_new, name=None)
    parser.add_argument('-f', '--config', help='Configuration file path. By default, the first of $NEWT_CONFIG, '
                                               '$XDG_CONFIG_HOME/newt/config, ~/.config/newt/config, ~/.newtrc '
                                               'and /etc/newtrc that exists is used.')
    parser.add_argument('-d', '--notes-dir', help='The directory in which to store notes.')
    parser.add_argument('-e', '--editor', help='The editor command to invoke for editing notes.')
    parser.add_argument('-p', '--pager', help='The pager command to invoke for viewing notes.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print verbose debugging output.')

    subs = parser.add_subparsers(title='Commands')

    p_new = subs.add_parser('new', help='Create a new note. This is the default if no other command is given.')
    p_new.add_argument('name', nargs='?',
                       help='File name for the created note. A unique name based on the date is used if omitted.')
    p_new.set_defaults(func=_new)

    p_list = subs.add_parser('list', help='List current notes, oldest first, with the first line of each.')
    p_list.add_argument('-w', '--width', type=_width, default=60,
                        help='Maximum number of characters of each first line to show (at least 4).')
    p_list.set_defaults(func=_list)

    p_view = subs.add_parser('view', help='View a note in the configured pager program.')
    p_view.add_argument('index', type=int, help='Index of the note, as displayed by the list command.')
    p_view.set_defaults(func=_view)

    p_edit = subs.add_parser('edit', help='Edit a note in the configured editor.')
    p_edit.add_argument('index', type=int, help='Index of the note, as displayed by the list command.')
    p_edit.set_defaults(func=_edit)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(message)s')
    env = Environment(verbose=args.verbose)
    try:
        config = resolve_config(env, args.config, notes_dir=args.notes_dir, editor=args.editor, pager=args.pager)
        return args.func(args, config, env)
    except Error as e:
        print(e, file=sys.stderr)
        return 1
