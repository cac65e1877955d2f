"""The watch application: one event-driven owner of viewport and text.

``WatchApp`` reruns the command on a timer, parses its output off the event
loop, and redraws the viewport whenever the text, the window size or the
scroll offset changes. All state changes happen on the asyncio loop, one
event at a time.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from dekh.command import CommandRunner, Runner
from dekh.config import WatchConfig, format_interval
from dekh.keybindings import ViewerKeybindingsManager, wheel_action
from dekh.keys import is_mouse_sequence, parse_mouse
from dekh.scroll import ScrollAction, ViewportState, apply_action, resize, snap
from dekh.text import EMPTY_BLOCK, TextBlock, parse_text
from dekh.viewport import render

if TYPE_CHECKING:
    from dekh.terminal import Terminal

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_CURSOR_HOME = "\x1b[H"
_ERASE_LINE = "\x1b[K"
_ERASE_BELOW = "\x1b[J"


class WatchApp:
    """Watches a command and shows its output in a scrollable viewport."""

    def __init__(
        self,
        config: WatchConfig,
        terminal: Terminal,
        runner: Runner | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.terminal = terminal
        self.runner = runner if runner is not None else CommandRunner(config.command)
        self.keybindings = ViewerKeybindingsManager(config.keybindings)
        self._clock = clock

        self._block: TextBlock = EMPTY_BLOCK
        self._state = ViewportState()
        self._last_run: datetime | None = None
        self._started = False
        self._stopped = asyncio.Event()

    # -- state --------------------------------------------------------------

    @property
    def block(self) -> TextBlock:
        return self._block

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Attach to the terminal and size the viewport."""
        self.terminal.start(self.handle_input, self.handle_resize)
        self._started = True
        self._state = resize(
            self._state, self._block, self.terminal.columns, self.terminal.rows
        )
        logger.info(
            "watching %r every %s",
            self.config.command_line,
            format_interval(self.config.interval),
        )
        self.render_frame()

    def stop(self) -> None:
        """Ask :meth:`run` to return."""
        self._stopped.set()

    async def run(self) -> None:
        """Run until quit: refresh on a timer while handling input."""
        tasks: list[asyncio.Task[None]] = []
        try:
            self.start()
            refresh_task = asyncio.create_task(self._refresh_loop())
            tasks = [refresh_task, asyncio.create_task(self._stop_requested())]
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            if refresh_task in done:
                refresh_task.result()
        finally:
            for task in tasks:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            self._started = False
            self.terminal.stop()
            logger.info("stopped watching %r", self.config.command_line)

    async def _stop_requested(self) -> None:
        await self._stopped.wait()

    async def _refresh_loop(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.config.interval)

    # -- events -------------------------------------------------------------

    async def refresh(self) -> None:
        """Run the command once and show its output."""
        self._last_run = self._clock()
        result = await self.runner.run()
        text = self.compose(result.output)
        block = await asyncio.to_thread(parse_text, text)
        self.set_block(block)

    def set_block(self, block: TextBlock) -> None:
        """Replace the displayed text, keeping the scroll offset if it fits."""
        self._block = block
        self._state = snap(self._state, block)
        self.render_frame()

    def handle_input(self, data: str) -> None:
        if is_mouse_sequence(data):
            event = parse_mouse(data)
            if event is None:
                return
            action = wheel_action(event)
            step = self.config.wheel_step
        else:
            action = self.keybindings.action_for(data)
            step = self.config.scroll_step

        if action is None:
            return
        self.apply(action, step)

    def apply(self, action: ScrollAction, step: int = 1) -> None:
        if action == "quit":
            self.stop()
            return
        state = apply_action(action, self._state, self._block, step)
        if state != self._state:
            self._state = state
            self.render_frame()

    def handle_resize(self) -> None:
        width, height = self.terminal.columns, self.terminal.rows
        logger.debug("resize to %dx%d", width, height)
        self._state = resize(self._state, self._block, width, height)
        self.render_frame()

    # -- rendering ----------------------------------------------------------

    def header(self) -> str:
        when = self._last_run.strftime(TIME_FORMAT) if self._last_run else ""
        return (
            f"Every: {format_interval(self.config.interval)}\t"
            f"Command: {self.config.command_line}\t"
            f"Time: {when}"
        )

    def compose(self, output: str) -> str:
        """Return the full text to display for *output*."""
        if not self.config.show_header:
            return output
        return f"{self.header()}\n\n{output}"

    def frame(self) -> str:
        s = self._state
        return render(self._block, s.x, s.y, s.width, s.height)

    def render_frame(self) -> None:
        if not self._started:
            return
        lines = self.frame().split("\n")
        self.terminal.write(
            _CURSOR_HOME
            + (_ERASE_LINE + "\r\n").join(lines)
            + _ERASE_LINE
            + _ERASE_BELOW
        )
