#
# src/refenv/__init__.py
#
"""
refenv: runs test scripts in a reference interpreter shell and grades the
tagged test case output it prints.
"""
from refenv.environment import RefEnv
from refenv.grading import ResultGrader
from refenv.protocol import ParseFailure, ParseResult, ParseSuccess, parse_output
from refenv.records import ExecutionState, TestCase, TestFile, TestSuite

__all__ = [
    "ExecutionState",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "RefEnv",
    "ResultGrader",
    "TestCase",
    "TestFile",
    "TestSuite",
    "parse_output",
]

# 🔼⚙️
