import os
import re
from pathlib import Path
from typing import List

from loguru import logger

from judge.adapters.base import LanguageAdapter
from judge.models.results import PreparedArtifact
from judge.sandbox.process_runner import remove_paths


JAVA_PUBLIC_CLASS = re.compile(r"public\s+(?:(?:final|abstract)\s+)*class\s+([A-Za-z_$][\w$]*)")

BINARY_NAME = "main.exe" if os.name == "nt" else "main"


class CompiledAdapter(LanguageAdapter):
    """
    Compile once in `prepare`, then run the artifact for every test case.

    The compile step has its own timeout, separate from test execution.
    """

    COMPILE_TIMEOUT_MS: int = 15000

    def __init__(self, *args, compile_timeout_ms: int = COMPILE_TIMEOUT_MS, **kwargs):
        super().__init__(*args, **kwargs)
        self.compile_timeout_ms = compile_timeout_ms

    def source_name(self, source_code: str) -> str:
        raise NotImplementedError

    def compiler(self) -> str:
        raise NotImplementedError

    def compile_args(self, source_path: Path, invocation_dir: Path) -> List[str]:
        raise NotImplementedError

    def run_command(self, source_code: str, invocation_dir: Path) -> PreparedArtifact:
        raise NotImplementedError

    def prepare(self, source_code: str) -> PreparedArtifact:
        try:
            invocation_dir = self._create_invocation_dir()
        except OSError as e:
            return PreparedArtifact(error=f"Failed to create work directory: {e}")

        try:
            source_path = self._write_source(invocation_dir, self.source_name(source_code), source_code)
        except (OSError, ValueError) as e:
            return self._write_error(invocation_dir, e)

        try:
            outcome = self.runner.run(
                self.compiler(),
                self.compile_args(source_path, invocation_dir),
                stdin="",
                timeout_ms=self.compile_timeout_ms,
                cleanup_paths=[source_path],
                cwd=invocation_dir,
            )
        except Exception:
            remove_paths([invocation_dir])
            raise

        error = None
        if outcome.timed_out:
            error = "Compilation timed out"
        elif outcome.exit_code != 0:
            error = outcome.stderr.strip() or "Compilation failed"

        if error is not None:
            logger.info(
                "compile_failed",
                language=self.language,
                exit_code=outcome.exit_code,
                timed_out=outcome.timed_out,
            )
            remove_paths([invocation_dir])
            return PreparedArtifact(error=error)

        return self.run_command(source_code, invocation_dir)


class CAdapter(CompiledAdapter):
    language = "c"
    standard = "c11"
    extension = ".c"

    def source_name(self, source_code: str) -> str:
        return "main" + self.extension

    def compiler(self) -> str:
        return self.toolchains.gcc

    def compile_args(self, source_path: Path, invocation_dir: Path) -> List[str]:
        return [
            str(source_path),
            "-o", str(invocation_dir / BINARY_NAME),
            "-O2",
            f"-std={self.standard}",
            "-fstack-protector-strong",
            "-lm",
        ]

    def run_command(self, source_code: str, invocation_dir: Path) -> PreparedArtifact:
        return PreparedArtifact(
            work_dir=invocation_dir,
            command=str(invocation_dir / BINARY_NAME),
        )


class CppAdapter(CAdapter):
    language = "cpp"
    standard = "c++17"
    extension = ".cpp"

    def compiler(self) -> str:
        return self.toolchains.gxx


class JavaAdapter(CompiledAdapter):
    language = "java"
    DEFAULT_CLASS_NAME = "Main"

    def __init__(self, *args, stack_size: str = "4m", **kwargs):
        super().__init__(*args, **kwargs)
        self.stack_size = stack_size

    @classmethod
    def class_name(cls, source_code: str) -> str:
        # javac requires the file name to match the public class; when none is
        # found we fall back and let the compiler report the mismatch
        match = JAVA_PUBLIC_CLASS.search(source_code)
        return match.group(1) if match else cls.DEFAULT_CLASS_NAME

    def source_name(self, source_code: str) -> str:
        return f"{self.class_name(source_code)}.java"

    def compiler(self) -> str:
        return self.toolchains.javac

    def compile_args(self, source_path: Path, invocation_dir: Path) -> List[str]:
        return ["-d", str(invocation_dir), str(source_path)]

    def run_command(self, source_code: str, invocation_dir: Path) -> PreparedArtifact:
        return PreparedArtifact(
            work_dir=invocation_dir,
            command=self.toolchains.java,
            args=[
                f"-Xmx{self.memory_limit_mb}m",
                f"-Xss{self.stack_size}",
                "-cp", str(invocation_dir),
                self.class_name(source_code),
            ],
        )
