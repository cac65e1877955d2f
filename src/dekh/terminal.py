"""Terminal abstraction for the full-screen viewer.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that owns
the real tty: raw mode, the alternate screen, mouse reporting and resize
notification. Input and resize callbacks are always delivered on the asyncio
event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from dekh.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Screen modes
# ---------------------------------------------------------------------------

# (enable, disable) pairs, entered in order and left in reverse.
_SCREEN_MODES = (
    ("\x1b[?1049h", "\x1b[?1049l"),  # alternate screen
    ("\x1b[?25l", "\x1b[?25h"),  # cursor
    ("\x1b[?7l", "\x1b[?7h"),  # autowrap
)
_MOUSE_MODES = (
    ("\x1b[?1002h", "\x1b[?1002l"),  # button and drag tracking
    ("\x1b[?1006h", "\x1b[?1006l"),  # SGR coordinates
)
_CLEAR_SCREEN = "\x1b[2J\x1b[H"

_FALLBACK_SIZE = (80, 24)
_READ_CHUNK = 4096

WRITE_LOG_ENV = "DEKH_WRITE_LOG"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """What the watch app needs from a terminal."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """The controlling terminal, driven through ``sys.stdin``/``sys.stdout``.

    ``start`` must be called from within a running event loop: stdin is
    watched with :meth:`asyncio.AbstractEventLoop.add_reader` and ``SIGWINCH``
    with :meth:`~asyncio.AbstractEventLoop.add_signal_handler`.
    """

    def __init__(self, *, mouse: bool = True) -> None:
        self._modes = _SCREEN_MODES + (_MOUSE_MODES if mouse else ())
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._saved_attrs: list | None = None
        self._write_log_path = os.environ.get(WRITE_LOG_ENV, "")

    @property
    def columns(self) -> int:
        return self._size()[0]

    @property
    def rows(self) -> int:
        return self._size()[1]

    def _size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(sys.stdout.fileno())
        except (ValueError, OSError):
            return _FALLBACK_SIZE
        return size.columns, size.lines

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Take over the screen and start delivering input and resizes."""
        fd = sys.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._emit("".join(enable for enable, _ in self._modes) + _CLEAR_SCREEN)

        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(on_input)

        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(fd, self._read_stdin)
        self._loop.add_signal_handler(signal.SIGWINCH, on_resize)
        logger.debug("terminal started (%dx%d)", *self._size())

    def stop(self) -> None:
        """Give the screen back in the state it was found. Safe to repeat."""
        if self._loop is not None:
            self._loop.remove_reader(sys.stdin.fileno())
            self._loop.remove_signal_handler(signal.SIGWINCH)
            self._loop = None

        if self._stdin_buffer is not None:
            self._stdin_buffer.clear()
            self._stdin_buffer = None

        if self._saved_attrs is None:
            return
        self._emit("".join(disable for _, disable in reversed(self._modes)))
        termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None
        logger.debug("terminal stopped")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write a frame to stdout, appending it to the write log if set."""
        self._emit(data)
        if not self._write_log_path:
            return
        try:
            with open(self._write_log_path, "a", encoding="utf-8") as f:
                f.write(data)
        except OSError:
            logger.warning("cannot append to %s", self._write_log_path)

    def _emit(self, data: str) -> None:
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError as exc:
            logger.debug("stdout write failed: %s", exc)

    # -- input --------------------------------------------------------------

    def _read_stdin(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), _READ_CHUNK)
        except OSError:
            return
        if raw and self._stdin_buffer is not None:
            self._stdin_buffer.process(raw.decode("utf-8", errors="replace"))
