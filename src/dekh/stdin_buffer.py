"""StdinBuffer splits raw stdin chunks into complete input sequences.

Terminal input arrives in arbitrary chunks: an arrow key or a mouse report
may be split across two reads, and several keys may arrive in one. The
buffer emits each key or mouse sequence exactly once and whole. A lone ESC
is held back briefly in case the rest of a sequence follows.
"""

from __future__ import annotations

import asyncio
import re
from typing import Callable, Literal

ESC = "\x1b"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def sequence_status(data: str) -> SequenceStatus:
    """Classify *data* as a complete or incomplete escape sequence."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    # CSI: ESC [ params final
    if introducer == "[":
        if len(data) < 3:
            return "incomplete"
        payload = data[2:]
        # X10 mouse: ESC [ M b x y
        if payload.startswith("M"):
            return "complete" if len(data) >= 6 else "incomplete"
        if not 0x40 <= ord(payload[-1]) <= 0x7E:
            return "incomplete"
        if payload.startswith("<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"

    # SS3: ESC O x
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    # Meta keys: ESC x
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            status = sequence_status(buffer[pos:end])
            if status != "incomplete":
                break
            if end >= len(buffer):
                return sequences, buffer[pos:]
            end += 1

        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    ``timeout`` is in seconds; an incomplete sequence still pending after
    that long is flushed as-is.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer = ""
        self._timeout = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._on_data: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def _emit(self, data: str) -> None:
        if self._on_data is not None:
            self._on_data(data)

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._cancel_timeout()
        self._buffer += data

        sequences, self._buffer = split_sequences(self._buffer)
        for sequence in sequences:
            self._emit(sequence)

        if not self._buffer:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            for sequence in self.flush():
                self._emit(sequence)
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit(sequence)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def flush(self) -> list[str]:
        """Return and clear any buffered, incomplete input."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def get_buffer(self) -> str:
        return self._buffer

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
