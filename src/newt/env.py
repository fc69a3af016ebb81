"""Access to the process environment, and expansion of ``$VAR`` references in configuration strings.

The main entry points are :class:`Environment` and :func:`interpolate`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import os
import os.path
import shutil
from typing import Callable, Iterator, List, Mapping, NamedTuple, Optional
from newt.errors import InterpolationCycleError


logger = logging.getLogger('newt')


@dataclass
class Environment:
    """The read-only view of the outside world used when resolving configuration.

    Tests (or other callers) can supply their own :attr:`variables` instead of the process environment.
    """

    variables: Mapping[str, str] = field(default_factory=lambda: os.environ)
    """Environment variables used for lookups and for the executable search path."""

    verbose: bool = False
    """If True, :meth:`debug` messages are logged."""

    def get(self, name: str) -> Optional[str]:
        return self.variables.get(name)

    def interpolate(self, text: str) -> Optional[str]:
        """Expands variable references in text using :attr:`variables`. See :func:`interpolate`."""
        return interpolate(text, self.get)

    def expand_user(self, path: str) -> str:
        """Replaces a leading ``~`` with the home directory, preferring this environment's ``HOME``."""
        if path == '~' or path.startswith('~/'):
            home = self.get('HOME')
            if home:
                return home + path[1:]
        return os.path.expanduser(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def search_path(self, program: str) -> Optional[str]:
        """Returns the full path to the given program, or None if it cannot be found.

        Names without a directory component are looked up in this environment's ``PATH``;
        names with one are checked as-is.
        """
        return shutil.which(program, path=self.get('PATH') or os.defpath)

    def debug(self, msg: str, *args) -> None:
        if self.verbose:
            logger.debug(msg, *args)


class _State(Enum):
    TEXT = 'text'
    DOLLAR = 'dollar'
    VAR_NAME_NO_BRACE = 'var_name_no_brace'
    VAR_NAME_BRACE = 'var_name_brace'
    END = 'end'


class _Text(NamedTuple):
    text: str


class _Var(NamedTuple):
    name: str


def _is_id(c: str) -> bool:
    return ('A' <= c <= 'Z') or ('a' <= c <= 'z') or ('0' <= c <= '9') or c == '_'


class _Lexer:
    """Splits a string into literal text and variable references.

    Iterating over an instance yields :class:`_Text` and :class:`_Var` tokens in input order.
    """

    def __init__(self, text: str):
        self._chars = iter(text)
        self._lookahead = next(self._chars, None)
        self._buffer = []
        self._state = _State.TEXT

    def __iter__(self) -> Iterator:
        return self

    def __next__(self):
        while self._state is not _State.END:
            tok = self._advance()
            if tok is not None:
                return tok
        raise StopIteration

    def _get_next(self) -> None:
        self._lookahead = next(self._chars, None)

    def _take(self) -> str:
        contents = ''.join(self._buffer)
        self._buffer.clear()
        return contents

    def _take_text(self) -> Optional[_Text]:
        return _Text(self._take()) if self._buffer else None

    def _advance(self):
        if self._state is _State.TEXT:
            return self._advance_text()
        if self._state is _State.DOLLAR:
            return self._advance_dollar()
        if self._state is _State.VAR_NAME_NO_BRACE:
            return self._advance_no_brace()
        if self._state is _State.VAR_NAME_BRACE:
            return self._advance_brace()
        return None

    def _advance_text(self):
        c = self._lookahead
        if c is None:
            self._state = _State.END
            return self._take_text()
        if c == '$':
            self._state = _State.DOLLAR
        else:
            self._buffer.append(c)
        self._get_next()
        return None

    def _advance_dollar(self):
        c = self._lookahead
        if c is None:
            # a lone trailing dollar sign is just text
            self._state = _State.END
            self._buffer.append('$')
            return self._take_text()
        if c == '$':
            self._state = _State.TEXT
            self._buffer.append('$')
            self._get_next()
            return None
        if c == '{':
            self._state = _State.VAR_NAME_BRACE
            self._get_next()
            return self._take_text()
        if _is_id(c):
            self._state = _State.VAR_NAME_NO_BRACE
            return self._take_text()
        self._state = _State.TEXT
        self._buffer.append('$')
        return None

    def _advance_no_brace(self):
        c = self._lookahead
        if c is not None and _is_id(c):
            self._buffer.append(c)
            self._get_next()
            return None
        self._state = _State.TEXT if c is not None else _State.END
        return _Var(self._take())

    def _advance_brace(self):
        c = self._lookahead
        if c is None:
            self._state = _State.END
            return _Text('${' + self._take())
        self._get_next()
        if c == '}':
            self._state = _State.TEXT
            return _Var(self._take())
        self._buffer.append(c)
        return None


def interpolate(text: str, lookup: Callable[[str], Optional[str]], _expanding: List[str] = None) -> Optional[str]:
    """Replaces ``$NAME`` and ``${NAME}`` references in text with values from lookup.

    * ``$$`` produces a literal ``$``, as does a ``$`` at the end of the text or before a character
      that cannot start a name.
    * A bare name is the longest run of ASCII letters, digits and underscores.
    * A ``${`` with no closing ``}`` is kept as literal text.
    * Values are themselves interpolated before being substituted, so variables may refer to other variables.

    Returns None if any referenced variable (including ones referenced indirectly) has no value.
    Raises :exc:`newt.errors.InterpolationCycleError` if a variable refers back to itself.
    """
    expanding = _expanding if _expanding is not None else []
    parts = []
    for tok in _Lexer(text):
        if isinstance(tok, _Text):
            parts.append(tok.text)
            continue
        if tok.name in expanding:
            raise InterpolationCycleError(expanding + [tok.name])
        value = lookup(tok.name)
        if value is None:
            return None
        expanding.append(tok.name)
        try:
            expanded = interpolate(value, lookup, expanding)
        finally:
            expanding.pop()
        if expanded is None:
            return None
        parts.append(expanded)
    return ''.join(parts)
