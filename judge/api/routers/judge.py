"""
Judge router endpoints.

API prefix: /api/v1/judge/

- POST /submit: judge code against every test case of a question
- POST /run: run code once against the sample input
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from config import config
from judge.api.dependencies import JudgeService, get_judge_service
from judge.api.models import RunRequest, RunResponse, SubmitRequest, SubmitResponse, TestResultView
from judge.managers.judge_manager import (
    EXECUTION_ERROR_MESSAGE,
    OUTPUT_LIMIT_MESSAGE,
    TIME_LIMIT_MESSAGE,
    WRONG_ANSWER_MESSAGE,
)
from judge.models import Submission, TestCase, Verdict


router = APIRouter(prefix="/api/v1/judge", tags=["Judge"])

GENERIC_MESSAGES = {
    TIME_LIMIT_MESSAGE,
    OUTPUT_LIMIT_MESSAGE,
    WRONG_ANSWER_MESSAGE,
    EXECUTION_ERROR_MESSAGE,
}


def student_error(verdict: Verdict, hidden: bool) -> str:
    """
    Failure text safe to show the exam-taker.

    Diagnostics of hidden test cases are reduced to their category, since a
    program could otherwise echo hidden input through its error stream.
    """
    message = verdict.error_message or WRONG_ANSWER_MESSAGE
    if hidden and message not in GENERIC_MESSAGES:
        return "Runtime error"
    return message


@router.post(
    "/submit",
    response_model=SubmitResponse,
    summary="Judge Submission",
    description="""
Judge source code against all test cases of a question.

Test cases run sequentially against a single prepared artifact. Each test
case is all-or-nothing. Security rejections, unsupported languages and
compile errors return **400** with the reason in `detail`.
    """,
    responses={
        400: {"description": "Submission could not be judged (security, language or compile error)"},
    },
)
async def submit(request: SubmitRequest, service: JudgeService = Depends(get_judge_service)):
    test_cases = [
        TestCase(
            id=tc.id if tc.id is not None else str(index),
            input=tc.input,
            expected_output=tc.expected_output,
            marks=tc.marks,
            hidden=tc.hidden,
        )
        for index, tc in enumerate(request.test_cases, start=1)
    ]
    submission = Submission(
        source_code=request.code,
        language=request.language,
        test_cases=test_cases,
        timeout_ms=config.clamp_timeout(request.timeout_ms),
    )

    result = await service.judge(submission)
    if result.hard_error is not None:
        raise HTTPException(status_code=400, detail=result.hard_error)

    results = [
        TestResultView(
            index=index,
            passed=verdict.passed,
            error=None if verdict.passed else student_error(verdict, test_case.hidden),
        )
        for index, (verdict, test_case) in enumerate(zip(result.verdicts, test_cases), start=1)
    ]

    logger.info(
        "submission_judged",
        language=request.language,
        passed=result.passed_count,
        total=len(test_cases),
    )

    return SubmitResponse(
        passed=result.passed_count,
        total=len(test_cases),
        score=result.total_marks,
        max_score=sum(tc.marks for tc in test_cases),
        results=results,
    )


@router.post(
    "/run",
    response_model=RunResponse,
    summary="Run Against Sample",
    description="Run source code once against the sample input and return its output.",
)
async def run(request: RunRequest, service: JudgeService = Depends(get_judge_service)):
    submission = Submission(
        source_code=request.code,
        language=request.language,
        test_cases=[
            TestCase(
                id="sample",
                input=request.input,
                expected_output=request.expected_output,
                marks=0,
                hidden=False,
            )
        ],
        timeout_ms=config.clamp_timeout(request.timeout_ms),
    )

    result = await service.judge(submission)
    if result.hard_error is not None:
        return RunResponse(success=False, output=result.hard_error, error=result.hard_error)

    verdict = result.verdicts[0]
    error = None if verdict.passed or verdict.error_message == WRONG_ANSWER_MESSAGE else verdict.error_message

    return RunResponse(
        success=True,
        output=error or verdict.output.strip() or "(no output)",
        error=error,
        timed_out=verdict.timed_out,
        passed=verdict.passed,
    )
