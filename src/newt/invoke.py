"""Turns configured editor and pager commands into processes."""

from __future__ import annotations
from dataclasses import dataclass, field
import os.path
import subprocess
from typing import List, Optional, Tuple
from newt import sh
from newt.conf import Config
from newt.env import Environment
from newt.errors import CannotInvokeError


@dataclass(frozen=True)
class Invocation:
    """A program and its arguments, ready to be started."""

    program: str
    args: Tuple[str, ...] = ()
    cwd: Optional[str] = None
    """Working directory for the process. If None, the current directory is used."""

    command: Optional[str] = field(default=None, compare=False)
    """The command text this was built from, used in error messages."""

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def run(self) -> int:
        """Runs the program, waits for it to finish, and returns its exit status.

        Raises :exc:`newt.errors.CannotInvokeError` if the program cannot be started.
        """
        try:
            return subprocess.call(self.argv, cwd=self.cwd)
        except OSError as e:
            raise CannotInvokeError(self.command or ' '.join(self.argv), e) from e


def build_invocation(command: str, extra_arg: str = None, cwd: str = None) -> Optional[Invocation]:
    """Splits command into words (see :mod:`newt.sh`) and returns an :class:`Invocation` for them.

    The first word is the program. If extra_arg is given, it is added after all the other arguments.
    Returns None if command contains no words.
    """
    words = sh.split(command)
    program = next(words, None)
    if program is None:
        return None
    args = tuple(words)
    if extra_arg is not None:
        args += (extra_arg,)
    return Invocation(program, args, cwd, command)


def _run_on_file(command: str, path: str) -> int:
    path = os.path.abspath(path)
    invocation = build_invocation(command, path, cwd=os.path.dirname(path))
    if invocation is None:
        raise CannotInvokeError(command)
    return invocation.run()


def edit_file(config: Config, env: Environment, path: str) -> int:
    """Opens the file in the configured editor and returns the editor's exit status."""
    return _run_on_file(config.editor_command(env), path)


def view_file(config: Config, env: Environment, path: str) -> int:
    """Opens the file in the configured pager and returns the pager's exit status."""
    return _run_on_file(config.pager_command(env), path)
