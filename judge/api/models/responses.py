"""
Pydantic response models for the Judge API.

Responses only ever carry the student-safe view of a judgement: pass/fail
and a generic message per test case. Expected outputs, marks per test case
and diffs stay server-side.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class TestResultView(BaseModel):
    """Outcome of one test case as shown to the exam-taker."""

    __test__ = False

    index: int = Field(
        ...,
        description="1-based position of the test case",
        examples=[1],
        ge=1,
    )
    passed: bool = Field(
        ...,
        description="Whether the test case passed",
        examples=[True],
    )
    error: Optional[str] = Field(
        None,
        description="Generic failure reason (null when passed)",
        examples=["Wrong answer"],
    )


class SubmitResponse(BaseModel):
    """Aggregate result of judging a submission."""

    success: bool = Field(True, description="Always true; hard errors return HTTP 400")
    passed: int = Field(..., description="Number of passed test cases", examples=[3], ge=0)
    total: int = Field(..., description="Number of test cases", examples=[4], ge=0)
    score: float = Field(..., description="Marks awarded", examples=[12.0], ge=0)
    max_score: float = Field(..., description="Marks available", examples=[16.0], ge=0)
    results: List[TestResultView] = Field(
        default_factory=list,
        description="Per-test outcome in submission order",
    )


class RunResponse(BaseModel):
    """Result of a sample run."""

    success: bool = Field(..., description="False when the code could not be run at all")
    output: str = Field(
        ...,
        description="Program output, or the error text when it failed",
        examples=["8"],
    )
    error: Optional[str] = Field(None, description="Error text, if any")
    timed_out: bool = Field(False, description="Whether the run hit the time limit")
    passed: bool = Field(False, description="Whether output matched the sample output")


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["healthy"])
    service: str = Field(..., examples=["exam-judge-api"])
    version: str = Field(..., examples=["1.0.0"])
    languages: List[str] = Field(default_factory=list, examples=[["python", "c"]])
