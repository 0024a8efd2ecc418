from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator

from .errors import TerminalError


@contextmanager
def terminalSession(stream: Any = None) -> Iterator[None]:
    """
    Put the controlling terminal into cbreak / no-echo mode for the duration of the block.

    The saved tty attributes are written back on every exit path. On platforms
    without termios, raw input is left to readchar.
    """
    if os.name != "posix":
        yield
        return

    import termios
    import tty

    streamObj = stream if stream is not None else sys.stdin
    try:
        fd = streamObj.fileno()
        savedAttrs = termios.tcgetattr(fd)
        tty.setcbreak(fd, termios.TCSANOW)
    except (OSError, ValueError, termios.error) as exc:
        raise TerminalError(f"cannot enter raw input mode: {exc}") from exc

    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, savedAttrs)
