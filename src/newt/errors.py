"""Defines the exceptions raised by newt.

Everything raised deliberately derives from :class:`Error`, so the command line only needs to catch that.
"""

from __future__ import annotations
from typing import Iterable, Optional


class Error(Exception):
    """Base class for newt errors. :attr:`message` is suitable for showing to the user."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ConfigError(Error):
    """Raised when a configuration file cannot be parsed.

    .. attribute:: line
       :type: int

       1-based line number where the problem was found.

    .. attribute:: path
       :type: Optional[str]

       The file being parsed, if the text came from a file.
    """
    def __init__(self, message: str, line: int, path: Optional[str] = None):
        super().__init__(message)
        self.line = line
        self.path = path

    def with_path(self, path: str) -> ConfigError:
        """Returns a copy of this error that reports the given file path."""
        err = self.__class__.__new__(self.__class__)
        err.__dict__.update(self.__dict__)
        Exception.__init__(err, self.message)
        err.path = path
        return err

    def __str__(self):
        located = f'line {self.line}: {self.message}'
        if self.path:
            return f'{self.path}: {located}'
        return located

    def __eq__(self, other):
        return (type(self) is type(other) and self.message == other.message
                and self.line == other.line and self.path == other.path)

    def __hash__(self):
        return hash((type(self), self.message, self.line, self.path))


class UnrecognizedKeyError(ConfigError):
    def __init__(self, key: str, line: int, path: Optional[str] = None):
        super().__init__(f'unrecognized key {key!r}', line, path)
        self.key = key


class IllegalTokenError(ConfigError):
    def __init__(self, token: str, line: int, path: Optional[str] = None):
        super().__init__(f'illegal token {token!r}', line, path)
        self.token = token


class UnexpectedEofError(ConfigError):
    def __init__(self, line: int, path: Optional[str] = None):
        super().__init__('file ended unexpectedly', line, path)


class UnterminatedStringError(ConfigError):
    def __init__(self, line: int, path: Optional[str] = None):
        super().__init__('missing \'"\' character at end of string', line, path)


class ConfigReadError(Error):
    """Raised when a configuration file exists but cannot be read."""
    def __init__(self, path: str, cause: OSError):
        super().__init__(f'Cannot read configuration file {path}: {cause.strerror or cause}')
        self.path = path
        self.cause = cause


class ResolutionError(Error):
    """Raised when no usable value can be found for a setting."""


class NoNotesDirError(ResolutionError):
    def __init__(self, detail: str = None):
        message = 'No notes directory found'
        super().__init__(f'{message}: {detail}' if detail else message)


class NoEditorError(ResolutionError):
    def __init__(self, detail: str = None):
        message = 'No editor found'
        super().__init__(f'{message}: {detail}' if detail else message)


class NoPagerError(ResolutionError):
    def __init__(self, detail: str = None):
        message = 'No pager found'
        super().__init__(f'{message}: {detail}' if detail else message)


class InterpolationCycleError(Error):
    """Raised when an environment variable refers back to itself, directly or through other variables.

    :attr:`names` lists the variables in the order they were expanded, ending with the repeated one.
    """
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__('Environment variable refers to itself: ' + ' -> '.join(f'${n}' for n in self.names))


class CannotInvokeError(Error):
    """Raised when a command cannot be split into a program and arguments, or the program cannot be started."""
    def __init__(self, command: str, cause: OSError = None):
        message = f'Cannot invoke command {command!r}'
        if cause:
            message += f': {cause.strerror or cause}'
        super().__init__(message)
        self.command = command
        self.cause = cause


class NotesAccessError(Error):
    """Raised when the notes directory or a note in it cannot be read."""
    def __init__(self, path: str, cause: OSError):
        super().__init__(f'Cannot read {path}: {cause.strerror or cause}')
        self.path = path
        self.cause = cause


class NoSuchNoteError(Error):
    def __init__(self, index: int, count: int):
        super().__init__(f'No note with index {index} (there are {count})')
        self.index = index
        self.count = count
