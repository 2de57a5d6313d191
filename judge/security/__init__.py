from judge.security.code_validator import CodeValidator

__all__ = [
    "CodeValidator",
]
