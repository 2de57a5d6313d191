import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger

from judge.models.results import ExecutionOutcome, PreparedArtifact
from judge.sandbox.process_runner import ProcessRunner, remove_paths
from judge.toolchains import ToolchainConfig


INVALID_ENCODING_MESSAGE = "Source code contains characters that cannot be encoded as UTF-8"


class LanguageAdapter(ABC):
    """
    Turns source code for one language into something runnable.

    `prepare` is called once per submission, `execute` once per test case,
    and `release` exactly once at the end, whatever happened in between.
    """

    language: str = ""

    def __init__(
        self,
        toolchains: ToolchainConfig,
        runner: ProcessRunner,
        work_dir: Path,
        memory_limit_mb: int = 256,
    ):
        self.toolchains = toolchains
        self.runner = runner
        self.work_dir = Path(work_dir)
        self.memory_limit_mb = memory_limit_mb

    @abstractmethod
    def prepare(self, source_code: str) -> PreparedArtifact:
        ...

    def execute(self, artifact: PreparedArtifact, input_data: str, timeout_ms: int) -> ExecutionOutcome:
        return self.runner.run(
            artifact.command,
            artifact.args,
            stdin=input_data,
            timeout_ms=timeout_ms,
            cwd=artifact.work_dir,
        )

    def release(self, artifact: Optional[PreparedArtifact]) -> None:
        if artifact is not None and artifact.work_dir is not None:
            remove_paths([artifact.work_dir])

    def _create_invocation_dir(self) -> Path:
        self.work_dir.mkdir(parents=True, exist_ok=True)
        invocation_dir = self.work_dir / f"exam_{uuid.uuid4().hex}"
        invocation_dir.mkdir(mode=0o700)
        return invocation_dir

    @staticmethod
    def _write_source(directory: Path, filename: str, content: str) -> Path:
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        path.chmod(0o600)
        return path

    def _write_error(self, invocation_dir: Path, error: Exception) -> PreparedArtifact:
        logger.error("source_write_failed", language=self.language, error=str(error))
        remove_paths([invocation_dir])
        if isinstance(error, UnicodeError):
            return PreparedArtifact(error=INVALID_ENCODING_MESSAGE)
        return PreparedArtifact(error="Write error")
