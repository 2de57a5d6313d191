from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    safe: bool
    reason: Optional[str] = None


@dataclass
class ExecutionOutcome:
    stdout: str
    stderr: str
    exit_code: Optional[int]
    timed_out: bool
    wall_time_ms: int
    output_truncated: bool = False


@dataclass
class PreparedArtifact:
    """
    Runnable form of one submission.

    `command` and `args` are what each test case executes; `work_dir` holds
    every file created for the submission and is removed on release.
    """
    work_dir: Optional[Path] = None
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class Verdict:
    test_case_id: Any
    passed: bool
    marks_awarded: float
    wall_time_ms: int
    error_message: Optional[str] = None
    output: str = ""
    timed_out: bool = False


@dataclass
class JudgeResult:
    verdicts: List[Verdict] = field(default_factory=list)
    hard_error: Optional[str] = None

    @property
    def passed_count(self) -> int:
        return sum(1 for v in self.verdicts if v.passed)

    @property
    def total_marks(self) -> float:
        return sum(v.marks_awarded for v in self.verdicts)
