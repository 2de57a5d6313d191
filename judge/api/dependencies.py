import asyncio
from functools import lru_cache

from starlette.concurrency import run_in_threadpool

from config import config
from judge.managers import JudgeManager
from judge.models import JudgeResult, Submission


class JudgeService:
    """
    Admission control in front of the judge.

    The judge core does not bound how many submissions run at once; this
    service caps concurrent judge calls and runs each in a worker thread so
    the event loop stays responsive.
    """

    def __init__(self, manager: JudgeManager, max_concurrent: int):
        self.manager = manager
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def languages(self):
        return sorted(self.manager.adapters)

    async def judge(self, submission: Submission) -> JudgeResult:
        async with self._semaphore:
            return await run_in_threadpool(self.manager.judge, submission)


@lru_cache(maxsize=1)
def get_judge_service() -> JudgeService:
    return JudgeService(
        manager=JudgeManager.from_settings(config),
        max_concurrent=config.max_concurrent_judges,
    )
