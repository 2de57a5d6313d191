import codecs
import os
import shutil
import signal
import subprocess
import threading
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from loguru import logger

from judge.models.results import ExecutionOutcome


PathLike = Union[str, Path]


class CancellationToken:
    """
    Decides once how a process invocation ended.

    The deadline timer, the output reader and the completion path all race to
    settle the token; only the first caller wins and acts on it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reason: Optional[str] = None

    def settle(self, reason: str) -> bool:
        with self._lock:
            if self.reason is not None:
                return False
            self.reason = reason
            return True

    @property
    def settled(self) -> bool:
        return self.reason is not None


def remove_paths(paths: Iterable[PathLike]) -> None:
    for path in paths:
        path = Path(path)
        try:
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()
        except OSError as e:
            logger.debug("cleanup_failed", path=str(path), error=str(e))


class ProcessRunner:
    MAX_OUTPUT_CHARS: int = 10000
    MAX_STDERR_CHARS: int = 1000
    READ_CHUNK_SIZE: int = 4096
    # Upper bound on how long we wait past the deadline for pipes to drain
    KILL_GRACE_SECONDS: float = 2.0

    def __init__(
        self,
        max_output_chars: int = MAX_OUTPUT_CHARS,
        max_stderr_chars: int = MAX_STDERR_CHARS,
        env: Optional[Dict[str, str]] = None,
    ):
        self.max_output_chars = max_output_chars
        self.max_stderr_chars = max_stderr_chars
        self.env = env or {}

    def run(
        self,
        command: str,
        args: Optional[List[str]] = None,
        stdin: Optional[str] = "",
        timeout_ms: int = 5000,
        cleanup_paths: Optional[List[PathLike]] = None,
        cwd: Optional[PathLike] = None,
    ) -> ExecutionOutcome:
        """
        Run one process to completion, deadline or output cap.

        Never raises for process failures: a binary that cannot be started
        comes back as a non-zero exit code with the reason in stderr.
        `cleanup_paths` are removed afterwards whatever the outcome.
        """
        argv = [command, *(args or [])]
        try:
            return self._run(argv, stdin or "", timeout_ms, cwd)
        finally:
            remove_paths(cleanup_paths or [])

    def _run(
        self,
        argv: List[str],
        stdin: str,
        timeout_ms: int,
        cwd: Optional[PathLike],
    ) -> ExecutionOutcome:
        start_time = time.monotonic()

        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=str(cwd) if cwd else None,
                env=self._build_env(),
                start_new_session=os.name == "posix",
            )
        except (OSError, ValueError) as e:
            logger.warning("process_spawn_failed", command=argv[0], error=str(e))
            return ExecutionOutcome(
                stdout="",
                stderr=f"Failed to start {argv[0]}: {e}"[:self.max_stderr_chars],
                exit_code=1,
                timed_out=False,
                wall_time_ms=self._elapsed_ms(start_time),
            )

        token = CancellationToken()
        stdout_chunks: List[str] = []
        stderr_chunks: List[str] = []

        def on_deadline():
            if token.settle("timeout"):
                self._kill(proc)

        timeout_sec = timeout_ms / 1000.0
        timer = threading.Timer(timeout_sec, on_deadline)
        timer.daemon = True

        writer = threading.Thread(target=self._feed_stdin, args=(proc, stdin), daemon=True)
        readers = {
            proc.stdout: threading.Thread(target=self._read_stdout, args=(proc, token, stdout_chunks), daemon=True),
            proc.stderr: threading.Thread(target=self._read_stderr, args=(proc, stderr_chunks), daemon=True),
        }

        timer.start()
        writer.start()
        for thread in readers.values():
            thread.start()

        try:
            proc.wait(timeout=timeout_sec + self.KILL_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            token.settle("timeout")
            self._kill(proc)
            proc.wait()
        finally:
            timer.cancel()

        wall_time_ms = self._elapsed_ms(start_time)
        token.settle("exited")

        writer.join(timeout=self.KILL_GRACE_SECONDS)
        for stream, thread in readers.items():
            thread.join(timeout=self.KILL_GRACE_SECONDS)
            if not thread.is_alive():
                stream.close()

        stdout = "".join(stdout_chunks)
        timed_out = token.reason == "timeout"
        output_truncated = token.reason == "output_limit" or len(stdout) > self.max_output_chars

        if timed_out:
            logger.info("process_timeout", command=argv[0], timeout_ms=timeout_ms)
        elif output_truncated:
            logger.info("process_output_limit", command=argv[0], limit=self.max_output_chars)

        return ExecutionOutcome(
            stdout=stdout[:self.max_output_chars],
            stderr="".join(stderr_chunks)[:self.max_stderr_chars],
            exit_code=None if timed_out else proc.returncode,
            timed_out=timed_out,
            wall_time_ms=wall_time_ms,
            output_truncated=output_truncated,
        )

    def _build_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.env)
        return env

    @staticmethod
    def _feed_stdin(proc: subprocess.Popen, data: str) -> None:
        try:
            if data:
                proc.stdin.write(data.encode("utf-8", errors="replace"))
        except OSError:
            # Child exited (or was killed) without consuming its input
            pass
        finally:
            if not proc.stdin.closed:
                try:
                    proc.stdin.close()
                except OSError:
                    pass

    def _read_stdout(self, proc: subprocess.Popen, token: CancellationToken, chunks: List[str]) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        captured = 0
        for data in iter(lambda: proc.stdout.read1(self.READ_CHUNK_SIZE), b""):
            text = decoder.decode(data)
            chunks.append(text)
            captured += len(text)
            if captured > self.max_output_chars:
                if token.settle("output_limit"):
                    self._kill(proc)
                return
        chunks.append(decoder.decode(b"", final=True))

    def _read_stderr(self, proc: subprocess.Popen, chunks: List[str]) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        captured = 0
        # Keep draining past the cap so the child never blocks on a full pipe
        for data in iter(lambda: proc.stderr.read1(self.READ_CHUNK_SIZE), b""):
            if captured >= self.max_stderr_chars:
                continue
            text = decoder.decode(data)
            chunks.append(text)
            captured += len(text)

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        try:
            if os.name == "posix":
                os.killpg(proc.pid, signal.SIGKILL)
            else:
                proc.kill()
        except (ProcessLookupError, PermissionError):
            pass

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)
