"""Tokenizer for newt configuration files.

A configuration file is a sequence of whitespace-separated tokens. ``#`` starts a comment that runs to the end
of the line. A token is either a run of non-whitespace characters, or a double-quoted string in which ``\\"``,
``\\\\`` and a backslash at the end of a line (a continuation) are the only escapes allowed. A continuation
becomes a single space, and any whitespace and comments that follow it are skipped.

The lexer knows nothing about keys and values; see :meth:`newt.conf.Config.from_str`.
"""

from enum import Enum
from typing import NamedTuple, Optional
from newt.errors import IllegalTokenError, UnterminatedStringError


class Token(NamedTuple):
    text: str
    line: int
    """1-based line on which the token started."""


class _State(Enum):
    NEUTRAL = 'neutral'
    COMMENT = 'comment'
    BARE = 'bare'
    QUOTED = 'quoted'
    ESCAPE = 'escape'
    CONTINUATION = 'continuation'
    CONTINUATION_COMMENT = 'continuation_comment'
    END = 'end'


class Lexer:
    """Produces :class:`Token` instances from configuration text, one per call to :meth:`scan`.

    .. attribute:: line
       :type: int

       The line the lexer is currently on.
    """

    def __init__(self, text: str):
        self._chars = iter(text)
        self._lookahead = next(self._chars, None)
        self._buffer = []
        self._state = _State.NEUTRAL
        self._start = 1
        self.line = 1

    def scan(self) -> Optional[Token]:
        """Returns the next token, or None at the end of the input.

        May raise :exc:`newt.errors.IllegalTokenError` or :exc:`newt.errors.UnterminatedStringError`.
        """
        while self._state is not _State.END:
            tok = self._advance()
            if tok is not None:
                return tok
        return None

    def __iter__(self):
        while True:
            tok = self.scan()
            if tok is None:
                return
            yield tok

    def _get_next(self) -> None:
        if self._lookahead == '\n':
            self.line += 1
        self._lookahead = next(self._chars, None)

    def _take(self) -> Token:
        tok = Token(''.join(self._buffer), self._start)
        self._buffer.clear()
        return tok

    def _fail(self, err: Exception):
        self._state = _State.END
        raise err

    def _advance(self) -> Optional[Token]:
        if self._state is _State.NEUTRAL:
            return self._advance_neutral()
        if self._state is _State.COMMENT:
            return self._advance_comment()
        if self._state is _State.BARE:
            return self._advance_bare()
        if self._state is _State.QUOTED:
            return self._advance_quoted()
        if self._state is _State.ESCAPE:
            return self._advance_escape()
        if self._state is _State.CONTINUATION:
            return self._advance_continuation()
        if self._state is _State.CONTINUATION_COMMENT:
            return self._advance_continuation_comment()
        return None

    def _advance_neutral(self) -> None:
        c = self._lookahead
        if c is None:
            self._state = _State.END
        elif c == '#':
            self._state = _State.COMMENT
            self._get_next()
        elif c.isspace():
            self._get_next()
        elif c == '"':
            self._state = _State.QUOTED
            self._start = self.line
            self._get_next()
        else:
            self._state = _State.BARE
            self._start = self.line

    def _advance_comment(self) -> None:
        c = self._lookahead
        if c is None:
            self._state = _State.END
        elif c == '\n':
            self._state = _State.NEUTRAL
        else:
            self._get_next()

    def _advance_bare(self) -> Optional[Token]:
        c = self._lookahead
        if c is None or c.isspace():
            self._state = _State.NEUTRAL
            return self._take()
        self._buffer.append(c)
        self._get_next()
        return None

    def _advance_quoted(self) -> Optional[Token]:
        c = self._lookahead
        if c is None or c == '\n':
            self._fail(UnterminatedStringError(self.line))
        self._get_next()
        if c == '"':
            self._state = _State.NEUTRAL
            return self._take()
        if c == '\\':
            self._state = _State.ESCAPE
        else:
            self._buffer.append(c)
        return None

    def _advance_escape(self) -> None:
        c = self._lookahead
        if c is None:
            self._fail(UnterminatedStringError(self.line))
        if c == '\n':
            self._buffer.append(' ')
            self._state = _State.CONTINUATION
        elif c in '"\\':
            self._buffer.append(c)
            self._state = _State.QUOTED
        else:
            self._fail(IllegalTokenError('\\' + c, self.line))
        self._get_next()

    def _advance_continuation(self) -> None:
        c = self._lookahead
        if c == '#':
            self._state = _State.CONTINUATION_COMMENT
            self._get_next()
        elif c is not None and c.isspace():
            self._get_next()
        else:
            self._state = _State.QUOTED

    def _advance_continuation_comment(self) -> None:
        c = self._lookahead
        if c is None:
            self._state = _State.QUOTED
        elif c == '\n':
            self._state = _State.CONTINUATION
        else:
            self._get_next()
