"""Unit tests for utility functions (setup_pro.utils).

Tests cover:
- run_command (success, failure, timeout, cwd, env vars, stdin closed)
- read_text / write_text newline handling
- first_existing
- format_duration
- Rich output helpers (smoke tests)
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from setup_pro.utils import (
    first_existing,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
    read_text,
    run_command,
    write_text,
)

PY = sys.executable


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command([PY, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, stdout, stderr = await run_command(
            [PY, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, stderr = await run_command(
            [PY, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_timeout(self):
        returncode, stdout, stderr = await run_command(
            [PY, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_env(self):
        returncode, stdout, stderr = await run_command(
            [PY, "-c", "import os; print(os.environ['SETUP_PRO_TEST'])"],
            env={"SETUP_PRO_TEST": "value"},
        )
        assert returncode == 0
        assert stdout == "value"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stdin_is_closed(self):
        # A prompting child must see EOF instead of hanging.
        returncode, stdout, stderr = await run_command(
            [PY, "-c", "import sys; print(repr(sys.stdin.read()))"], timeout=10
        )
        assert returncode == 0
        assert stdout == "''"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_binary_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["nonexistent-binary-12345-xyz"])

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_exec_arguments(self, mock_subprocess, tmp_path: Path):
        proc = mock_subprocess(stdout="  done\n", returncode=0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as mock_exec:
            result = await run_command(["npm", "install"], cwd=tmp_path)

        assert result == (0, "done", "")
        args, kwargs = mock_exec.await_args
        assert args == ("npm", "install")
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stdin"] is asyncio.subprocess.DEVNULL
        assert kwargs["env"] is None


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    @pytest.mark.unit
    def test_crlf_round_trip(self, tmp_path: Path):
        target = tmp_path / "nested" / "vite.config.ts"
        write_text(target, "a\r\nb\r\n")

        assert target.read_bytes() == b"a\r\nb\r\n"
        assert read_text(target) == "a\r\nb\r\n"

    @pytest.mark.unit
    def test_first_existing(self, tmp_path: Path):
        (tmp_path / "vite.config.js").write_text("", encoding="utf-8")
        (tmp_path / "src").mkdir()

        assert first_existing(tmp_path, ("vite.config.ts", "vite.config.js")) == tmp_path / "vite.config.js"
        assert first_existing(tmp_path, ("src",)) is None
        assert first_existing(tmp_path, ()) is None


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0.0s"), (3.7, "3.7s"), (59.94, "59.9s"), (65.2, "1m 5s"), (600, "10m 0s"), (-1, "0.0s")],
    )
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_helpers_do_not_raise(self):
        print_stage_header("Project Ready")
        print_summary_table({"Project": "my-app", "Duration": "3.7s"})
        print_success("done")
        print_warning("careful")
        print_error("failed")
