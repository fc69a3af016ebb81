"""Splits command strings such as ``vim -c 'set tw=80'`` into words, roughly the way a POSIX shell would.

Only quoting and backslash escapes are understood; there is no variable expansion, globbing or redirection.
Variables in configured commands are handled separately, by :func:`newt.env.interpolate`.

* Unquoted whitespace separates words.
* Inside single quotes, every character is literal, including backslashes. The one exception is ``\\'``,
  which produces a quote character without ending the quoted section.
* Inside double quotes, a backslash makes the following character literal.
* Outside quotes, a backslash makes the following character (even whitespace) part of the current word.
* A backslash at the very end of the input is kept as-is.
* Empty words, such as ``''``, are dropped.
"""

from enum import Enum
from typing import Iterator, NamedTuple, Optional


class _Quote(Enum):
    SINGLE = "'"
    DOUBLE = '"'


class _Kind(Enum):
    SPACE = 'space'
    TEXT = 'text'
    QUOTE = 'quote'
    BACKSLASH = 'backslash'
    END = 'end'


class _State(NamedTuple):
    kind: _Kind
    quote: Optional[_Quote] = None
    """For QUOTE, which quote is open. For BACKSLASH, the quote that was open before it, if any."""


_SPACE = _State(_Kind.SPACE)
_TEXT = _State(_Kind.TEXT)
_END = _State(_Kind.END)


class _Lexer:
    def __init__(self, line: str):
        self._chars = iter(line)
        self._lookahead = next(self._chars, None)
        self._buffer = []
        self._state = _SPACE

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        while self._state.kind is not _Kind.END:
            word = self._advance()
            if word is not None:
                return word
        raise StopIteration

    def _get_next(self) -> None:
        self._lookahead = next(self._chars, None)

    def _take(self) -> Optional[str]:
        if not self._buffer:
            return None
        word = ''.join(self._buffer)
        self._buffer.clear()
        return word

    def _advance(self) -> Optional[str]:
        kind = self._state.kind
        if kind is _Kind.SPACE:
            return self._advance_space()
        if kind is _Kind.TEXT:
            return self._advance_text()
        if kind is _Kind.QUOTE:
            return self._advance_quote(self._state.quote)
        if kind is _Kind.BACKSLASH:
            return self._advance_backslash(self._state.quote)
        return None

    def _advance_space(self) -> None:
        c = self._lookahead
        if c is None:
            self._state = _END
            return None
        if not c.isspace():
            self._state = self._after_word_char(c)
        self._get_next()
        return None

    def _advance_text(self) -> Optional[str]:
        c = self._lookahead
        if c is None:
            self._state = _END
            return self._take()
        self._get_next()
        if c.isspace():
            self._state = _SPACE
            return self._take()
        self._state = self._after_word_char(c)
        return None

    def _after_word_char(self, c: str) -> _State:
        """Handles a character that begins or continues a word outside quotes."""
        if c == '"':
            return _State(_Kind.QUOTE, _Quote.DOUBLE)
        if c == "'":
            return _State(_Kind.QUOTE, _Quote.SINGLE)
        if c == '\\':
            return _State(_Kind.BACKSLASH)
        self._buffer.append(c)
        return _TEXT

    def _advance_quote(self, quote: _Quote) -> Optional[str]:
        c = self._lookahead
        if c is None:
            # unterminated quote: keep what we have
            self._state = _END
            return self._take()
        self._get_next()
        if c == quote.value:
            self._state = _TEXT
        elif c == '\\':
            self._state = _State(_Kind.BACKSLASH, quote)
        else:
            self._buffer.append(c)
        return None

    def _advance_backslash(self, quote: Optional[_Quote]) -> Optional[str]:
        c = self._lookahead
        if c is None:
            self._state = _END
            self._buffer.append('\\')
            return self._take()
        if quote is _Quote.SINGLE and c != "'":
            self._buffer.append('\\')
        self._buffer.append(c)
        self._get_next()
        self._state = _State(_Kind.QUOTE, quote) if quote else _TEXT
        return None


def split(line: str) -> Iterator[str]:
    """Returns an iterator over the words of the given command string.

    The iterator is lazy and can only be consumed once.
    """
    return _Lexer(line)
