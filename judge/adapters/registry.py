from pathlib import Path
from typing import Dict, Optional, Type

from loguru import logger

from config import Settings
from judge.adapters.base import LanguageAdapter
from judge.adapters.compiled import CAdapter, CompiledAdapter, CppAdapter, JavaAdapter
from judge.adapters.interpreted import JavaScriptAdapter, PythonAdapter
from judge.sandbox.process_runner import ProcessRunner
from judge.toolchains import ToolchainConfig


ADAPTER_CLASSES: Dict[str, Type[LanguageAdapter]] = {
    "python": PythonAdapter,
    "javascript": JavaScriptAdapter,
    "java": JavaAdapter,
    "c": CAdapter,
    "cpp": CppAdapter,
}


def build_adapters(
    settings: Settings,
    toolchains: ToolchainConfig,
    runner: Optional[ProcessRunner] = None,
) -> Dict[str, LanguageAdapter]:
    """Instantiate one adapter per enabled language, sharing a single runner."""
    runner = runner or ProcessRunner(
        max_output_chars=settings.max_output_chars,
        max_stderr_chars=settings.max_stderr_chars,
    )
    work_dir = Path(settings.work_dir)

    adapters: Dict[str, LanguageAdapter] = {}
    for language in settings.enabled_languages_list:
        adapter_class = ADAPTER_CLASSES.get(language)
        if adapter_class is None:
            logger.warning("unknown_language_in_settings", language=language)
            continue

        kwargs = {"memory_limit_mb": settings.memory_limit_mb}
        if issubclass(adapter_class, CompiledAdapter):
            kwargs["compile_timeout_ms"] = settings.compile_timeout_ms
        if adapter_class is JavaAdapter:
            kwargs["stack_size"] = settings.java_stack_size

        adapters[language] = adapter_class(toolchains, runner, work_dir, **kwargs)

    return adapters
