from judge.adapters.base import LanguageAdapter
from judge.adapters.compiled import CAdapter, CompiledAdapter, CppAdapter, JavaAdapter
from judge.adapters.interpreted import InterpretedAdapter, JavaScriptAdapter, PythonAdapter
from judge.adapters.registry import ADAPTER_CLASSES, build_adapters

__all__ = [
    "ADAPTER_CLASSES",
    "CAdapter",
    "CompiledAdapter",
    "CppAdapter",
    "InterpretedAdapter",
    "JavaAdapter",
    "JavaScriptAdapter",
    "LanguageAdapter",
    "PythonAdapter",
    "build_adapters",
]
