"""
Request and response models for the Judge API.
"""

from judge.api.models.requests import (
    RunRequest,
    SubmitRequest,
    TestCaseRequest,
)
from judge.api.models.responses import (
    HealthResponse,
    RunResponse,
    SubmitResponse,
    TestResultView,
)

__all__ = [
    # Requests
    "RunRequest",
    "SubmitRequest",
    "TestCaseRequest",
    # Responses
    "HealthResponse",
    "RunResponse",
    "SubmitResponse",
    "TestResultView",
]
