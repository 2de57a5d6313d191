"""
API Routers for the Exam Judge service.

Current:
- Judge: /api/v1/judge/... - Submission judging and sample runs
"""

from judge.api.routers.judge import router as judge_router


__all__ = [
    "judge_router",
]
