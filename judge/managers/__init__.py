from judge.managers.judge_manager import JudgeManager, normalize_output

__all__ = [
    "JudgeManager",
    "normalize_output",
]
