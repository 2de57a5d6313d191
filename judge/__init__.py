from judge.managers import (
    JudgeManager,
    normalize_output,
)

from judge.models import (
    ExecutionOutcome,
    JudgeResult,
    Submission,
    TestCase,
    Verdict,
)

from judge.sandbox import ProcessRunner
from judge.security import CodeValidator

__all__ = [
    # Models
    "ExecutionOutcome",
    "JudgeResult",
    "Submission",
    "TestCase",
    "Verdict",
    # Components
    "CodeValidator",
    "JudgeManager",
    "ProcessRunner",
    "normalize_output",
]
