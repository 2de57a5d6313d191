import ast
import re
from typing import Dict, List, Pattern, Set

from loguru import logger

from judge.models.results import ValidationResult


def _compile(patterns: List[str]) -> List[Pattern]:
    return [re.compile(p) for p in patterns]


PYTHON_FORBIDDEN = _compile([
    r"\b(?:import|from)\s+(?:os|sys|subprocess|socket|requests|urllib|http|shutil|pathlib|glob"
    r"|importlib|ctypes|threading|multiprocessing|pickle|marshal|signal|pty|asyncio)\b",
    r"__import__",
    r"__builtins__",
    r"__class__",
    r"__mro__",
    r"__subclasses__",
    r"__globals__",
    r"\bopen\s*\(",
    r"\bexec\s*\(",
    r"\beval\s*\(",
    r"\bcompile\s*\(",
    r"\bglobals\s*\(",
    r"\blocals\s*\(",
    r"\bvars\s*\(",
    r"\bgetattr\s*\(",
    r"\bsetattr\s*\(",
    r"\bdelattr\s*\(",
    r"\bbreakpoint\s*\(",
])

JAVASCRIPT_FORBIDDEN = _compile([
    r"require\s*\(",
    r"process\.",
    r"child_process",
    r"fs\.",
    r"\bhttp\b",
    r"\bhttps\b",
    r"net\.",
    r"eval\s*\(",
    r"Function\s*\(",
    r"new\s+Function",
    r"XMLHttpRequest",
    r"fetch\s*\(",
    r"import\s*\(",
    r"exec\s*\(",
    r"spawn\s*\(",
    r"while\s*\(\s*true\s*\)\s*\{",
    r"for\s*\(\s*;\s*;\s*\)",
])

JAVA_FORBIDDEN = _compile([
    r"Runtime\.getRuntime\(\)",
    r"ProcessBuilder",
    r"System\.exit\s*\(",
    r"java\.io\.File",
    r"java\.net\.",
    r"java\.nio\.",
    r"Class\.forName",
    r"\.reflect\.",
    r"SecurityManager",
    r"System\.load\s*\(",
    r"Runtime\.exec",
    r"new\s+Thread\s*\(",
    r"Executors\.",
    r"java\.lang\.Process",
])

C_FORBIDDEN = _compile([
    r"\bsystem\s*\(",
    r"\bpopen\s*\(",
    r"\bexecl\b",
    r"\bexeclp\b",
    r"\bexecv\b",
    r"\bexecvp\b",
    r"\bfork\s*\(",
    r"\bdlopen\s*\(",
    r"\bptrace\s*\(",
    r"\bsocket\s*\(",
    r"#include\s*[<\"]sys/socket",
    r"#include\s*[<\"]netinet",
    r"#include\s*[<\"]arpa/",
    r"\bunlink\s*\(",
    r"\bremove\s*\(",
    r"\brename\s*\(",
    r"\bchmod\s*\(",
])


class CodeValidator:
    """
    Static screen applied before any process is spawned.

    Only filters known dangerous API surface. Memory, CPU and time exhaustion
    are bounded by the process limits and the output cap, not here.
    """

    MAX_CODE_LENGTH: int = 50000

    LANGUAGE_PATTERNS: Dict[str, List[Pattern]] = {
        "python": PYTHON_FORBIDDEN,
        "javascript": JAVASCRIPT_FORBIDDEN,
        "java": JAVA_FORBIDDEN,
        "c": C_FORBIDDEN,
        "cpp": C_FORBIDDEN,
    }

    PYTHON_DANGEROUS_IMPORTS: Set[str] = {
        "os",
        "sys",
        "subprocess",
        "socket",
        "requests",
        "urllib",
        "http",
        "shutil",
        "pathlib",
        "glob",
        "importlib",
        "ctypes",
        "threading",
        "multiprocessing",
        "pickle",
        "marshal",
        "signal",
        "pty",
        "asyncio",
        "builtins",
    }

    PYTHON_DANGEROUS_CALLS: Set[str] = {
        "exec",
        "eval",
        "compile",
        "open",
        "__import__",
        "getattr",
        "setattr",
        "delattr",
        "globals",
        "locals",
        "vars",
        "breakpoint",
    }

    FORBIDDEN_REASON = "Forbidden system call or import detected"

    def __init__(self, max_code_length: int = MAX_CODE_LENGTH):
        self.max_code_length = max_code_length

    def validate(self, code: str, language: str) -> ValidationResult:
        if len(code) > self.max_code_length:
            return self._reject(language, "Code too long")

        patterns = self.LANGUAGE_PATTERNS.get(language)
        if patterns is None:
            return self._reject(language, "Unsupported language")

        if any(pattern.search(code) for pattern in patterns):
            return self._reject(language, self.FORBIDDEN_REASON)

        if language == "python" and not self._python_ast_is_safe(code):
            return self._reject(language, self.FORBIDDEN_REASON)

        return ValidationResult(safe=True)

    def _python_ast_is_safe(self, code: str) -> bool:
        try:
            tree = ast.parse(code)
        except (SyntaxError, ValueError):
            # Unparsable code is a runtime failure, not a policy violation
            return True

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.split(".")[0] in self.PYTHON_DANGEROUS_IMPORTS:
                        return False

            elif isinstance(node, ast.ImportFrom):
                if node.module and node.module.split(".")[0] in self.PYTHON_DANGEROUS_IMPORTS:
                    return False

            elif isinstance(node, ast.Call):
                if isinstance(node.func, ast.Name) and node.func.id in self.PYTHON_DANGEROUS_CALLS:
                    return False

        return True

    def _reject(self, language: str, reason: str) -> ValidationResult:
        logger.warning("code_rejected", language=language, reason=reason)
        return ValidationResult(safe=False, reason=reason)
