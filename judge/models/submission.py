from dataclasses import dataclass, field
from typing import Any, List


@dataclass(frozen=True)
class TestCase:
    __test__ = False

    id: Any
    input: str
    expected_output: str
    marks: float
    hidden: bool = True


@dataclass
class Submission:
    source_code: str
    language: str
    test_cases: List[TestCase] = field(default_factory=list)
    timeout_ms: int = 5000
