"""Tests for dekh.command -- running the watched command."""

from __future__ import annotations

import sys

import pytest

from dekh.command import CommandRunner


class TestCommandRunner:
    def test_empty_argv_rejected(self) -> None:
        with pytest.raises(ValueError):
            CommandRunner([])

    @pytest.mark.asyncio
    async def test_captures_stdout_and_stderr(self) -> None:
        runner = CommandRunner(
            [
                sys.executable,
                "-c",
                "import sys; print('out', flush=True); sys.stderr.write('err\\n')",
            ]
        )
        result = await runner.run()
        assert not result.failed
        assert result.exit_code == 0
        assert "out\n" in result.output
        assert "err\n" in result.output
        assert result.duration >= 0

    @pytest.mark.asyncio
    async def test_non_zero_exit_is_not_a_failure(self) -> None:
        runner = CommandRunner(
            [sys.executable, "-c", "import sys; print('x'); sys.exit(3)"]
        )
        result = await runner.run()
        assert not result.failed
        assert result.exit_code == 3
        assert result.output == "x\n"

    @pytest.mark.asyncio
    async def test_preserves_escape_sequences(self) -> None:
        runner = CommandRunner(
            [sys.executable, "-c", "print('\\x1b[31mred\\x1b[0m', end='')"]
        )
        result = await runner.run()
        assert result.output == "\x1b[31mred\x1b[0m"

    @pytest.mark.asyncio
    async def test_missing_executable_reports_error_as_output(self) -> None:
        runner = CommandRunner(["dekh-no-such-command-for-tests"])
        result = await runner.run()
        assert result.failed
        assert result.exit_code is None
        assert result.output == result.error
        assert "dekh-no-such-command-for-tests" in result.output
