"""Shell subprocess execution with a hard timeout and bounded output capture."""

from __future__ import annotations

import os
import signal
import subprocess
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, Mapping, cast

_READ_CHUNK = 64 * 1024
_READER_JOIN_SECONDS = 1.0


@dataclass(frozen=True)
class ProcessOutput:
    exit_status: int | None
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False
    truncated: bool = False


class _BoundedReader(threading.Thread):
    """Drain a pipe to EOF, keeping at most ``limit`` bytes."""

    def __init__(self, stream: IO[bytes], limit: int) -> None:
        super().__init__(daemon=True)
        self._stream = stream
        self._limit = limit
        self._chunks: list[bytes] = []
        self._size = 0
        self.truncated = False
        self.interrupted = False

    def run(self) -> None:
        try:
            while True:
                chunk = self._stream.read1(_READ_CHUNK)
                if not chunk:
                    break
                room = self._limit - self._size
                if room > 0:
                    kept = chunk[:room]
                    self._chunks.append(kept)
                    self._size += len(kept)
                if len(chunk) > max(room, 0):
                    self.truncated = True
        except (OSError, ValueError):
            self.interrupted = True

    def text(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="replace")

    def close(self) -> None:
        if not self.is_alive():
            self._stream.close()


def _signal_group(proc: subprocess.Popen[bytes], sig: int) -> None:
    if os.name == "nt":
        proc.kill()
        return
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        pass


def _terminate_group(proc: subprocess.Popen[bytes], grace_seconds: float) -> None:
    _signal_group(proc, signal.SIGTERM)
    deadline = time.monotonic() + grace_seconds
    while proc.poll() is None and time.monotonic() < deadline:
        time.sleep(0.02)
    _signal_group(proc, signal.SIGKILL)


@contextmanager
def spawned(
    argv: list[str],
    cwd: Path,
    env: Mapping[str, str] | None,
    grace_seconds: float,
) -> Iterator[subprocess.Popen[bytes]]:
    """Start ``argv`` in its own process group; kill and reap the group on exit."""
    proc = subprocess.Popen(
        argv,
        cwd=cwd,
        env=dict(env) if env is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        start_new_session=(os.name != "nt"),
    )
    try:
        yield proc
    finally:
        if proc.poll() is None:
            _terminate_group(proc, grace_seconds)
        else:
            # reap stray background children left in the group
            _signal_group(proc, signal.SIGKILL)
        proc.wait()


def run_shell(
    command: str,
    *,
    cwd: Path,
    timeout_seconds: float,
    output_limit_bytes: int,
    env: Mapping[str, str] | None = None,
    shell: str = "sh",
    grace_seconds: float = 0.5,
) -> ProcessOutput:
    started = time.monotonic()
    try:
        with spawned([shell, "-c", command], cwd, env, grace_seconds) as proc:
            stdout = cast(IO[bytes], proc.stdout)
            stderr = cast(IO[bytes], proc.stderr)
            readers = (_BoundedReader(stdout, output_limit_bytes), _BoundedReader(stderr, output_limit_bytes))
            for reader in readers:
                reader.start()
            timed_out = False
            exit_status: int | None
            try:
                exit_status = proc.wait(timeout=timeout_seconds)
            except subprocess.TimeoutExpired:
                timed_out = True
                exit_status = None
    except OSError as exc:
        return ProcessOutput(
            exit_status=None,
            stdout="",
            stderr=f"failed to execute command: {exc}",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    for reader in readers:
        reader.join(timeout=_READER_JOIN_SECONDS)
        reader.close()
    duration_ms = int((time.monotonic() - started) * 1000)
    stderr = readers[1].text()
    if timed_out:
        stderr = (stderr + f"\ncommand timed out after {timeout_seconds}s").strip()
    return ProcessOutput(
        exit_status=exit_status,
        stdout=readers[0].text(),
        stderr=stderr,
        duration_ms=duration_ms,
        timed_out=timed_out,
        truncated=any(reader.truncated for reader in readers),
    )


__all__ = ["ProcessOutput", "run_shell", "spawned"]
