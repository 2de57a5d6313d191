"""
Shared fixtures for the judge test suite.

Python submissions run on the interpreter executing the tests, so the core
suite needs no extra toolchains. Tests for node, gcc, g++ and javac skip
when those binaries are not on PATH.
"""

import shutil
import sys

import pytest

from judge.adapters import CAdapter, CppAdapter, JavaAdapter, JavaScriptAdapter, PythonAdapter
from judge.managers import JudgeManager
from judge.models import TestCase
from judge.sandbox import ProcessRunner
from judge.toolchains import ToolchainConfig


requires_node = pytest.mark.skipif(shutil.which("node") is None, reason="node not installed")
requires_gcc = pytest.mark.skipif(shutil.which("gcc") is None, reason="gcc not installed")
requires_gxx = pytest.mark.skipif(shutil.which("g++") is None, reason="g++ not installed")
requires_java = pytest.mark.skipif(
    shutil.which("javac") is None or shutil.which("java") is None,
    reason="JDK not installed",
)


@pytest.fixture
def toolchains():
    return ToolchainConfig(
        python=sys.executable,
        node=shutil.which("node") or "node",
        gcc=shutil.which("gcc") or "gcc",
        gxx=shutil.which("g++") or "g++",
        javac=shutil.which("javac") or "javac",
        java=shutil.which("java") or "java",
    )


@pytest.fixture
def runner():
    return ProcessRunner()


@pytest.fixture
def work_dir(tmp_path):
    return tmp_path / "judge"


@pytest.fixture
def adapters(toolchains, runner, work_dir):
    return {
        "python": PythonAdapter(toolchains, runner, work_dir),
        "javascript": JavaScriptAdapter(toolchains, runner, work_dir),
        "java": JavaAdapter(toolchains, runner, work_dir),
        "c": CAdapter(toolchains, runner, work_dir),
        "cpp": CppAdapter(toolchains, runner, work_dir),
    }


@pytest.fixture
def manager(adapters):
    return JudgeManager(adapters=adapters)


@pytest.fixture
def make_case():
    def _make_case(input="", expected_output="", marks=1, id=None, hidden=True):
        return TestCase(
            id=id if id is not None else f"tc-{input!r}",
            input=input,
            expected_output=expected_output,
            marks=marks,
            hidden=hidden,
        )
    return _make_case


SUM_PYTHON = "a = int(input())\nb = int(input())\nprint(a + b)\n"
