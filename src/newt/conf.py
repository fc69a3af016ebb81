"""Defines the newt configuration and how each setting is resolved.

Settings come from, in priority order:

1. Command-line overrides, merged in with :meth:`Config.with_notes_dir` and friends.
2. The configuration file, found via :data:`CONFIG_PATHS` unless a path is given explicitly.
3. A compiled-in list of candidates for each setting, which may refer to environment variables.

The first two are stored on :class:`Config`. The candidates are only consulted when a setting is requested,
so the same :class:`Config` can be resolved again against a different :class:`newt.env.Environment`.

A configuration file looks like this:

.. code-block:: text

   # comments run to the end of the line
   notes_dir ~/.notes
   editor "nano -w"
   pager $PAGER
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional
from newt import sh
from newt.env import Environment
from newt.errors import ConfigError, ConfigReadError, NoEditorError, NoNotesDirError, NoPagerError,\
    UnexpectedEofError, UnrecognizedKeyError
from newt.parse import Lexer


CONFIG_PATHS = (
    '$NEWT_CONFIG',
    '$XDG_CONFIG_HOME/newt/config',
    '$HOME/.config/newt/config',
    '$HOME/.newtrc',
    '/etc/newtrc',
)
"""Places to look for a configuration file. The first one that exists is used."""

NOTES_PATHS = ('$NEWT_NOTES_DIR', '$HOME/.newt')
"""Notes directories to use if none is configured. The first one that exists is used."""

EDITORS = ('$EDITOR', 'vim', 'vi', 'nano')
"""Editor commands to use if none is configured. The first one whose program can be found is used."""

PAGERS = ('$PAGER', 'less', 'more', 'cat')
"""Pager commands to use if none is configured. The first one whose program can be found is used."""

KEYS = ('notes_dir', 'editor', 'pager')


def _first_candidate(env: Environment, candidates: Iterable[str], accept: Callable[[str], bool]) -> Optional[str]:
    for template in candidates:
        value = env.interpolate(template)
        if not value:
            env.debug('Skipping %s: not set', template)
            continue
        if accept(value):
            return value
        env.debug('Skipping %s: %s is not usable', template, value)
    return None


def _command_exists(env: Environment, command: str) -> bool:
    program = next(sh.split(command), None)
    return program is not None and env.search_path(program) is not None


def find_config_file(env: Environment) -> Optional[str]:
    """Returns the first of :data:`CONFIG_PATHS` that is an existing file, or None."""
    path = _first_candidate(env, CONFIG_PATHS, env.is_file)
    if path:
        env.debug('Using configuration file %s', path)
    else:
        env.debug('No configuration file found, using default configuration')
    return path


def read_config_file(path: str) -> Config:
    """Parses the configuration file at the given path.

    Raises :exc:`newt.errors.ConfigError` (reporting the path) if the file is malformed, or
    :exc:`newt.errors.ConfigReadError` if it cannot be read.
    """
    try:
        with open(path, 'r') as file:
            contents = file.read()
    except OSError as e:
        raise ConfigReadError(path, e) from e
    try:
        return Config.from_str(contents)
    except ConfigError as e:
        raise e.with_path(path) from None


def resolve_config(env: Environment, config_path: str = None, *,
                   notes_dir: str = None, editor: str = None, pager: str = None) -> Config:
    """Loads the configuration file and applies the given overrides.

    If config_path is omitted, the file is located with :func:`find_config_file`; if there is no such file,
    an empty configuration is used. Overrides that are None leave the file's values in place.
    """
    if config_path is None:
        config_path = find_config_file(env)
    config = read_config_file(config_path) if config_path else Config()
    return config.with_notes_dir(notes_dir).with_editor(editor).with_pager(pager)


@dataclass(frozen=True)
class Config:
    """Settings from the configuration file and the command line.

    Fields are None when neither source set them. Use :meth:`notes_dir_path`, :meth:`editor_command` and
    :meth:`pager_command` to get usable values, falling back to the environment.
    """

    notes_dir: Optional[str] = None
    """Directory in which notes are stored. May contain environment variables and ``~``."""

    editor: Optional[str] = None
    """Command used to edit notes. May contain environment variables and shell-style quoting."""

    pager: Optional[str] = None
    """Command used to view notes. May contain environment variables and shell-style quoting."""

    @classmethod
    def from_str(cls, contents: str) -> Config:
        """Parses configuration file contents.

        Each key must be followed by exactly one value. If a key appears more than once, the last value wins.
        Raises a subclass of :exc:`newt.errors.ConfigError` for malformed input.
        """
        lexer = Lexer(contents)
        values = {}
        for key in lexer:
            if key.text not in KEYS:
                raise UnrecognizedKeyError(key.text, key.line)
            value = lexer.scan()
            if value is None:
                raise UnexpectedEofError(key.line)
            values[key.text] = value.text
        return cls(**values)

    def with_notes_dir(self, notes_dir: Optional[str]) -> Config:
        """Returns a copy with the given notes directory, or an unchanged copy if it is None."""
        return replace(self, notes_dir=notes_dir if notes_dir is not None else self.notes_dir)

    def with_editor(self, editor: Optional[str]) -> Config:
        """Returns a copy with the given editor, or an unchanged copy if it is None."""
        return replace(self, editor=editor if editor is not None else self.editor)

    def with_pager(self, pager: Optional[str]) -> Config:
        """Returns a copy with the given pager, or an unchanged copy if it is None."""
        return replace(self, pager=pager if pager is not None else self.pager)

    def notes_dir_path(self, env: Environment) -> str:
        """Returns the notes directory to use.

        A configured directory is returned whether or not it exists. Otherwise the first of :data:`NOTES_PATHS`
        that is an existing directory is used. The directory is never created.

        Raises :exc:`newt.errors.NoNotesDirError` if nothing suitable is found.
        """
        if self.notes_dir is not None:
            path = env.interpolate(self.notes_dir)
            if not path:
                raise NoNotesDirError(f'cannot expand {self.notes_dir!r}')
            path = env.expand_user(path)
        else:
            path = _first_candidate(env, NOTES_PATHS, lambda p: env.is_dir(env.expand_user(p)))
            if not path:
                raise NoNotesDirError()
            path = env.expand_user(path)
        env.debug('Using notes directory %s', path)
        return path

    def editor_command(self, env: Environment) -> str:
        """Returns the editor command to use. Raises :exc:`newt.errors.NoEditorError` if there is none."""
        return self._command(env, self.editor, EDITORS, NoEditorError, 'editor')

    def pager_command(self, env: Environment) -> str:
        """Returns the pager command to use. Raises :exc:`newt.errors.NoPagerError` if there is none."""
        return self._command(env, self.pager, PAGERS, NoPagerError, 'pager')

    @staticmethod
    def _command(env: Environment, configured: Optional[str], candidates: Iterable[str],
                 error: type, name: str) -> str:
        if configured is not None:
            command = env.interpolate(configured)
            if not command:
                raise error(f'cannot expand {configured!r}')
        else:
            command = _first_candidate(env, candidates, lambda c: _command_exists(env, c))
            if not command:
                raise error()
        env.debug('Using %s %s', name, command)
        return command
