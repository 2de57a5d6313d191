import shutil
from dataclasses import asdict, dataclass
from typing import List, Optional

from loguru import logger

from config import Settings


def _resolve(override: Optional[str], *candidates: str) -> str:
    if override:
        return override
    for name in candidates:
        path = shutil.which(name)
        if path:
            return path
    # Unresolved tools surface later as a spawn failure
    return candidates[0]


# Tools each language needs at run time
LANGUAGE_TOOLS = {
    "python": ("python",),
    "javascript": ("node",),
    "java": ("javac", "java"),
    "c": ("gcc",),
    "cpp": ("gxx",),
}


@dataclass(frozen=True)
class ToolchainConfig:
    """Interpreter and compiler locations, resolved once at start-up."""

    python: str = "python3"
    node: str = "node"
    gcc: str = "gcc"
    gxx: str = "g++"
    javac: str = "javac"
    java: str = "java"

    @classmethod
    def resolve(cls, settings: Settings) -> "ToolchainConfig":
        toolchains = cls(
            python=_resolve(settings.python_path, "python3", "python"),
            node=_resolve(settings.node_path, "node", "nodejs"),
            gcc=_resolve(settings.gcc_path, "gcc"),
            gxx=_resolve(settings.gxx_path, "g++"),
            javac=_resolve(settings.javac_path, "javac"),
            java=_resolve(settings.java_path, "java"),
        )
        logger.info("toolchains_resolved", **asdict(toolchains))
        return toolchains

    def missing(self, languages: List[str]) -> List[str]:
        """Languages whose interpreter or compiler is not an executable on this host."""
        return [
            language
            for language in languages
            if any(shutil.which(getattr(self, tool)) is None for tool in LANGUAGE_TOOLS.get(language, ()))
        ]
