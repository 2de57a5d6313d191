from judge.sandbox.process_runner import CancellationToken, ProcessRunner, remove_paths

__all__ = [
    "CancellationToken",
    "ProcessRunner",
    "remove_paths",
]
