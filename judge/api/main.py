"""
Exam Judge API.

Runs untrusted exam submissions against test cases for the supported
languages: python, javascript, java, c and cpp.
"""

from fastapi import Depends, FastAPI

from judge.api.dependencies import JudgeService, get_judge_service
from judge.api.models import HealthResponse
from judge.api.routers import judge_router


API_VERSION = "1.0.0"

# OpenAPI tags for grouping endpoints
tags_metadata = [
    {
        "name": "Judge",
        "description": """
**Judging of exam submissions.**

Each submission is:
- Screened for known dangerous constructs before anything runs
- Compiled once (java, c, cpp) or written out once (python, javascript)
- Run against every test case in order, under a wall-clock limit and an output cap

Marks are all-or-nothing per test case. Expected outputs are never returned.
        """,
    },
    {
        "name": "Health",
        "description": "Service health check endpoints.",
    },
]


app = FastAPI(
    title="Exam Judge API",
    description="Multi-language code execution judge for exams",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
)

app.include_router(judge_router)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health Check",
    description="Check if the judge service is healthy and which languages it serves.",
)
async def health_check(service: JudgeService = Depends(get_judge_service)):
    """
    Health check endpoint.

    Returns 200 if the service is running and able to respond to requests.
    """
    return HealthResponse(
        status="healthy",
        service="exam-judge-api",
        version=API_VERSION,
        languages=service.languages,
    )
