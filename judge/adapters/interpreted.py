import os
import platform
from pathlib import Path

from judge.adapters.base import LanguageAdapter
from judge.models.results import PreparedArtifact


PYTHON_LIMITS_LAUNCHER = """\
import resource
import runpy
import sys
import traceback

SOURCE = {source_path!r}

for limit, value in (
    (resource.RLIMIT_AS, {memory_bytes}),
    (resource.RLIMIT_FSIZE, 0),
    (resource.RLIMIT_NPROC, 1),
):
    try:
        resource.setrlimit(limit, (value, value))
    except (ValueError, OSError):
        pass

try:
    runpy.run_path(SOURCE, run_name="__main__")
except SystemExit:
    raise
except BaseException as exc:
    # Report the failure as if main.py had been run directly
    tb = exc.__traceback__
    while tb is not None and tb.tb_frame.f_code.co_filename != SOURCE:
        tb = tb.tb_next
    traceback.print_exception(type(exc), exc, tb)
    sys.exit(1)
"""

JAVASCRIPT_STDIN_PROLOGUE = """\
const __stdinLines = require('fs').readFileSync(0, 'utf8').replace(/\\r/g, '').split('\\n');
let __stdinIndex = 0;
const readline = () => (__stdinIndex < __stdinLines.length ? __stdinLines[__stdinIndex++] : '');
"""


def supports_resource_limits() -> bool:
    return platform.system() != "Windows"


class InterpretedAdapter(LanguageAdapter):
    source_filename: str = "main"

    def prologue(self) -> str:
        return ""

    def interpreter(self) -> str:
        raise NotImplementedError

    def interpreter_args(self) -> list:
        return []

    def entry_point(self, invocation_dir: Path, source_path: Path) -> Path:
        """File handed to the interpreter; the submission itself by default."""
        return source_path

    def prepare(self, source_code: str) -> PreparedArtifact:
        try:
            invocation_dir = self._create_invocation_dir()
        except OSError as e:
            return PreparedArtifact(error=f"Failed to create work directory: {e}")

        try:
            source_path = self._write_source(
                invocation_dir,
                self.source_filename,
                self.prologue() + source_code + "\n",
            )
            entry_path = self.entry_point(invocation_dir, source_path)
        except (OSError, ValueError) as e:
            return self._write_error(invocation_dir, e)

        return PreparedArtifact(
            work_dir=invocation_dir,
            command=self.interpreter(),
            args=[*self.interpreter_args(), str(entry_path)],
        )


class PythonAdapter(InterpretedAdapter):
    """
    Runs `main.py` unmodified.

    Where `resource` is available the interpreter starts a small launcher
    instead, which lowers the rlimits and then runs the submission as
    `__main__`. Line numbers and `__future__` imports are unaffected.
    """

    language = "python"
    source_filename = "main.py"
    LAUNCHER_FILENAME = "_limits.py"

    def __init__(self, *args, apply_limits: bool = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_limits = supports_resource_limits() if apply_limits is None else apply_limits

    def launcher(self, source_path: Path) -> str:
        return PYTHON_LIMITS_LAUNCHER.format(
            memory_bytes=self.memory_limit_mb * 1024 * 1024,
            source_path=os.path.abspath(source_path),
        )

    def entry_point(self, invocation_dir: Path, source_path: Path) -> Path:
        if not self.apply_limits:
            return source_path
        return self._write_source(invocation_dir, self.LAUNCHER_FILENAME, self.launcher(source_path))

    def interpreter(self) -> str:
        return self.toolchains.python

    def interpreter_args(self) -> list:
        return ["-B", "-I"]


class JavaScriptAdapter(InterpretedAdapter):
    language = "javascript"
    source_filename = "main.js"

    def prologue(self) -> str:
        return JAVASCRIPT_STDIN_PROLOGUE

    def interpreter(self) -> str:
        return self.toolchains.node

    def interpreter_args(self) -> list:
        return [
            f"--max-old-space-size={self.memory_limit_mb}",
            "--disallow-code-generation-from-strings",
        ]
