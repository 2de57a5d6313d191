import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings


SUPPORTED_LANGUAGES = ("python", "javascript", "java", "c", "cpp")


class Settings(BaseSettings):
    work_dir: str = str(Path(tempfile.gettempdir()) / "exam_judge")

    # Execution limits
    execution_timeout_ms: int = 5000
    min_timeout_ms: int = 1000
    max_timeout_ms: int = 30000
    compile_timeout_ms: int = 15000
    max_code_length: int = 50000
    max_output_chars: int = 10000
    max_stderr_chars: int = 1000
    memory_limit_mb: int = 256
    java_stack_size: str = "4m"

    enabled_languages: str = ",".join(SUPPORTED_LANGUAGES)
    max_concurrent_judges: int = 4

    # HTTP service
    api_host: str = "0.0.0.0"
    api_port: int = 8001

    # Toolchain overrides, resolved from PATH when unset
    python_path: Optional[str] = None
    node_path: Optional[str] = None
    gcc_path: Optional[str] = None
    gxx_path: Optional[str] = None
    javac_path: Optional[str] = None
    java_path: Optional[str] = None

    class Config:
        env_prefix = "JUDGE_"
        env_file = ".env"
        extra = "ignore"

    @property
    def enabled_languages_list(self) -> List[str]:
        """Parse comma-separated languages into list"""
        return [lang.strip() for lang in self.enabled_languages.split(",") if lang.strip()]

    def clamp_timeout(self, timeout_ms: Optional[int]) -> int:
        if timeout_ms is None:
            return self.execution_timeout_ms
        return max(self.min_timeout_ms, min(self.max_timeout_ms, timeout_ms))


config = Settings()
