"""
Judge orchestration.

Drives one submission through screening, preparation and sequential
execution of every test case:

1. CodeValidator rejects known dangerous code before anything is spawned
2. The language adapter prepares (and compiles, if needed) the source once
3. Each test case runs against that artifact and is scored all-or-nothing

Only screening, unsupported languages and preparation failures stop a
submission. Anything that goes wrong inside a single test case becomes a
failed verdict for that test case alone.
"""
import uuid
from typing import Dict, Optional

from loguru import logger

from config import Settings, config
from judge.adapters import LanguageAdapter, build_adapters
from judge.models.results import ExecutionOutcome, JudgeResult, PreparedArtifact, Verdict
from judge.models.submission import Submission, TestCase
from judge.sandbox.process_runner import ProcessRunner
from judge.security import CodeValidator
from judge.toolchains import ToolchainConfig


TIME_LIMIT_MESSAGE = "Time limit exceeded"
OUTPUT_LIMIT_MESSAGE = "Output limit exceeded"
WRONG_ANSWER_MESSAGE = "Wrong answer"
EXECUTION_ERROR_MESSAGE = "Execution error"


def normalize_output(output: Optional[str]) -> str:
    """
    Canonicalize program output for comparison.

    Line endings become `\\n` and only the whitespace around the whole output
    is stripped; whitespace inside the output stays significant.
    """
    return (output or "").replace("\r\n", "\n").replace("\r", "\n").strip()


def failure_message(outcome: ExecutionOutcome) -> str:
    if outcome.timed_out:
        return TIME_LIMIT_MESSAGE
    if outcome.output_truncated:
        return OUTPUT_LIMIT_MESSAGE
    if outcome.exit_code != 0:
        return outcome.stderr.strip() or f"Runtime error (exit code {outcome.exit_code})"
    return WRONG_ANSWER_MESSAGE


class JudgeManager:
    def __init__(self, adapters: Dict[str, LanguageAdapter], validator: Optional[CodeValidator] = None):
        self.adapters = adapters
        self.validator = validator or CodeValidator()

    @classmethod
    def from_settings(cls, settings: Settings = config) -> "JudgeManager":
        toolchains = ToolchainConfig.resolve(settings)
        runner = ProcessRunner(
            max_output_chars=settings.max_output_chars,
            max_stderr_chars=settings.max_stderr_chars,
        )
        return cls(
            adapters=build_adapters(settings, toolchains, runner),
            validator=CodeValidator(max_code_length=settings.max_code_length),
        )

    def judge(self, submission: Submission) -> JudgeResult:
        judge_id = uuid.uuid4().hex[:12]
        logger.info(
            "judge_started",
            judge_id=judge_id,
            language=submission.language,
            test_cases=len(submission.test_cases),
        )

        validation = self.validator.validate(submission.source_code, submission.language)
        if not validation.safe:
            return self._hard_error(judge_id, f"security violation: {validation.reason}")

        adapter = self.adapters.get(submission.language)
        if adapter is None:
            return self._hard_error(judge_id, "unsupported language")

        try:
            artifact = adapter.prepare(submission.source_code)
        except Exception as e:
            logger.error("prepare_failed", judge_id=judge_id, language=submission.language, error=str(e))
            return self._hard_error(judge_id, "Failed to prepare submission")

        try:
            if artifact.error is not None:
                return self._hard_error(judge_id, artifact.error)

            verdicts = [
                self._run_test_case(adapter, artifact, test_case, submission.timeout_ms)
                for test_case in submission.test_cases
            ]
        finally:
            adapter.release(artifact)

        result = JudgeResult(verdicts=verdicts)
        logger.info(
            "judge_completed",
            judge_id=judge_id,
            language=submission.language,
            passed=result.passed_count,
            total=len(verdicts),
            marks=result.total_marks,
        )
        return result

    def _run_test_case(
        self,
        adapter: LanguageAdapter,
        artifact: PreparedArtifact,
        test_case: TestCase,
        timeout_ms: int,
    ) -> Verdict:
        try:
            outcome = adapter.execute(artifact, test_case.input, timeout_ms)
        except Exception as e:
            logger.error("test_case_error", test_case_id=str(test_case.id), error=str(e))
            return Verdict(
                test_case_id=test_case.id,
                passed=False,
                marks_awarded=0,
                wall_time_ms=0,
                error_message=EXECUTION_ERROR_MESSAGE,
            )

        passed = (
            not outcome.timed_out
            and not outcome.output_truncated
            and outcome.exit_code == 0
            and normalize_output(outcome.stdout) == normalize_output(test_case.expected_output)
        )

        return Verdict(
            test_case_id=test_case.id,
            passed=passed,
            marks_awarded=test_case.marks if passed else 0,
            wall_time_ms=outcome.wall_time_ms,
            error_message=None if passed else failure_message(outcome),
            output=outcome.stdout,
            timed_out=outcome.timed_out,
        )

    @staticmethod
    def _hard_error(judge_id: str, message: str) -> JudgeResult:
        logger.warning("hard_error", judge_id=judge_id, error=message[:200])
        return JudgeResult(verdicts=[], hard_error=message)
