# proctop/keyReader.py
from __future__ import annotations

import queue
import threading
from collections import deque
from typing import Optional

from readchar import readchar, key

# how long the rest of an escape sequence may take to arrive after its first byte
SEQUENCE_TIMEOUT_SEC = 0.05

CSI_PREFIXES = ("\x1b[", "\x1bO")


class KeyReader:
    """
    Reads characters on a daemon thread so the session loop can wait on keys with a timeout.

    Escape sequences are put back together in pollKey(): an ESC with nothing
    following it within SEQUENCE_TIMEOUT_SEC is a plain ESC key. Arrow keys come
    out as "KEY_UP" / "KEY_DOWN" / "KEY_LEFT" / "KEY_RIGHT", ESC as "\\x1b",
    backspace as "\\x08" and enter as "\\n". Other keys are passed through
    unchanged.

    readchar switches the tty with TCSAFLUSH before every read, so input typed
    before the thread's first read (or between two reads) is discarded.
    """

    def __init__(self) -> None:
        self._q: queue.Queue[str] = queue.Queue()
        self._pending: deque[str] = deque()
        self._stopEvent = threading.Event()
        self._t: threading.Thread | None = None

        self._rawMap: dict[str, str] = {
            "\x1b[A": "KEY_UP",
            "\x1b[B": "KEY_DOWN",
            "\x1b[D": "KEY_LEFT",
            "\x1b[C": "KEY_RIGHT",
            "\x1bOA": "KEY_UP",
            "\x1bOB": "KEY_DOWN",
            "\x1bOD": "KEY_LEFT",
            "\x1bOC": "KEY_RIGHT",

            # windows console scan codes
            "\x00H": "KEY_UP",
            "\x00P": "KEY_DOWN",
            "\x00K": "KEY_LEFT",
            "\x00M": "KEY_RIGHT",
            "\xe0H": "KEY_UP",
            "\xe0P": "KEY_DOWN",
            "\xe0K": "KEY_LEFT",
            "\xe0M": "KEY_RIGHT",
        }

        self._keyConstMap: dict[str, str] = {
            key.UP: "KEY_UP",
            key.DOWN: "KEY_DOWN",
            key.LEFT: "KEY_LEFT",
            key.RIGHT: "KEY_RIGHT",
            key.ESC: "\x1b",
            key.BACKSPACE: "\x08",
            key.ENTER: "\n",
        }

        self._sequences: set[str] = {s for s in (*self._rawMap, *self._keyConstMap) if len(s) > 1}

    @property
    def isRunning(self) -> bool:
        return self._t is not None and self._t.is_alive()

    def start(self) -> None:
        if self.isRunning:
            return
        self._stopEvent.clear()
        self._t = threading.Thread(target=self._loop, daemon=True, name="KeyReader")
        self._t.start()

    def stop(self) -> None:
        """
        Ask the reader thread to finish.

        The thread may still be blocked in readchar(). It exits after the next
        character arrives, without queueing it, and readchar then writes back
        the tty attributes it saw when that read started (the session's cbreak
        mode). The ptop entry point exits right away so this never shows; code
        that keeps running after MonitorApp.run() should not rely on the tty
        staying restored while keys are still being typed.
        """
        self._stopEvent.set()

    def _loop(self) -> None:
        while not self._stopEvent.is_set():
            try:
                ch = readchar()
            except Exception:
                continue

            # empty read: stdin hit EOF
            if self._stopEvent.is_set() or not ch:
                break
            self._q.put_nowait(ch)

    def _nextChar(self, timeoutSec: float) -> Optional[str]:
        if self._pending:
            return self._pending.popleft()
        try:
            return self._q.get(timeout=max(0.0, float(timeoutSec)))
        except queue.Empty:
            return None

    def _isSequencePrefix(self, seq: str) -> bool:
        return any(s != seq and s.startswith(seq) for s in self._sequences)

    def _readSequence(self, first: str) -> str:
        seq = first
        while self._isSequencePrefix(seq):
            ch = self._nextChar(SEQUENCE_TIMEOUT_SEC)
            if ch is None:
                break
            seq += ch

        if seq in self._sequences or len(seq) == 1:
            return seq

        if seq.startswith(CSI_PREFIXES):
            # unknown CSI / SS3 sequence (PgUp, F-keys, ...): swallow it up to its final byte
            while not ("\x40" <= seq[-1] <= "\x7e") or len(seq) <= 2:
                ch = self._nextChar(SEQUENCE_TIMEOUT_SEC)
                if ch is None:
                    break
                seq += ch
            return seq

        # ESC followed by an ordinary key: two separate keys
        self._pending.extendleft(reversed(seq[1:]))
        return seq[0]

    def pollKey(self, timeoutSec: float) -> Optional[str]:
        first = self._nextChar(timeoutSec)
        if first is None:
            return None
        return self.normalize(self._readSequence(first))

    def normalize(self, raw: str) -> str:
        mapped = self._keyConstMap.get(raw)
        if mapped:
            return mapped

        mapped = self._rawMap.get(raw)
        if mapped:
            return mapped

        if raw in ("\r", "\n"):
            return "\n"
        if raw in ("\x7f", "\x08"):
            return "\x08"
        if raw == "\x03":
            return "q"

        return raw
