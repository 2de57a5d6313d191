"""
Pydantic request models for the Judge API.

Field limits mirror what the judge core assumes about its input: the core
does not re-validate types, so everything is checked here.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Language = Literal["python", "javascript", "java", "c", "cpp"]


class TestCaseRequest(BaseModel):
    """A single test case as supplied by the question store."""

    __test__ = False

    id: Optional[str] = Field(
        None,
        description="Opaque identifier echoed back in internal results",
        examples=["64f1c0a2e13b"],
    )
    input: str = Field(
        "",
        description="Text piped to the program's standard input",
        examples=["3\n5"],
    )
    expected_output: str = Field(
        ...,
        description="Expected standard output (compared after normalization)",
        examples=["8"],
    )
    marks: float = Field(
        ...,
        description="Marks awarded when the test case passes",
        examples=[4],
        gt=0,
    )
    hidden: bool = Field(
        True,
        description="Hidden test cases never reveal program diagnostics",
    )


class SubmitRequest(BaseModel):
    """Judge a submission against the full set of test cases."""

    code: str = Field(
        ...,
        description="Source code submitted by the exam-taker",
        min_length=1,
        max_length=50000,
    )
    language: Language = Field(
        "python",
        description="Submission language",
        examples=["python"],
    )
    test_cases: List[TestCaseRequest] = Field(
        default_factory=list,
        description="Test cases, judged in the given order",
    )
    timeout_ms: Optional[int] = Field(
        None,
        description="Per-test wall-clock limit; clamped to the configured range",
        examples=[5000],
    )


class RunRequest(BaseModel):
    """Run code once against the question's sample input."""

    code: str = Field(
        ...,
        description="Source code to run",
        min_length=1,
        max_length=50000,
    )
    language: Language = Field(
        ...,
        description="Submission language",
        examples=["python"],
    )
    input: str = Field(
        "",
        description="Sample input",
        examples=["3\n5"],
    )
    expected_output: str = Field(
        "",
        description="Sample output",
        examples=["8"],
    )
    timeout_ms: Optional[int] = Field(
        None,
        description="Wall-clock limit; clamped to the configured range",
    )
