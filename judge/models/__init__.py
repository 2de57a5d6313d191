from judge.models.results import (
    ExecutionOutcome,
    JudgeResult,
    PreparedArtifact,
    ValidationResult,
    Verdict,
)
from judge.models.submission import (
    Submission,
    TestCase,
)

__all__ = [
    "ExecutionOutcome",
    "JudgeResult",
    "PreparedArtifact",
    "Submission",
    "TestCase",
    "ValidationResult",
    "Verdict",
]
