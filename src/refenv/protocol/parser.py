# src/refenv/protocol/parser.py

"""
Reconstructs test case records from the tagged output of the reference shell.

The expected stream layout is:

    <any number of unstructured lines>
    <#TEST CASES SIZE>
    N
    N times:
        <#TEST CASE PASSED>       true|false
        <#TEST CASE NAME>         text
        <#TEST CASE EXPECTED>     text
        <#TEST CASE ACTUAL>       text
        <#TEST CASE DESCRIPTION>  text
        <#TEST CASE REASON>       text
        <#TEST CASE BUGNUMBER>    text
    <#TEST CASES DONE>
    <any number of unstructured lines>

Every value may span several lines; a value ends at the next line starting
with `<#TEST CASE` or at the end of the stream.
"""

import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TypeAlias

import structlog
from attrs import define, field

from refenv.exceptions import (
    InvalidCaseCountError,
    MissingSizeMarkerError,
    ProtocolError,
    TagMismatchError,
    TruncatedStreamError,
)
from refenv.protocol.tags import FIELD_NAMES, FIELD_TAGS, SIZE_TAG, START_TAG
from refenv.records import TestCase

log = structlog.get_logger("protocol.parser")

DiagnosticSink: TypeAlias = Callable[[str], None]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
# Signed decimal digits only: no surrounding whitespace or underscores.
_CASE_COUNT = re.compile(r"[+-]?[0-9]+")
_PASSED, _NAME, _EXPECTED, _ACTUAL, _DESCRIPTION, _REASON, _BUGNUMBER = range(len(FIELD_NAMES))


@define(frozen=True, slots=True)
class ParseSuccess:
    """The stream was structurally valid. Individual cases may still have failed."""

    total_cases: int
    cases: tuple[TestCase, ...] = field(converter=tuple)
    bugnumber: str | None = None

    @property
    def ok(self) -> bool:
        return True


@define(frozen=True, slots=True)
class ParseFailure:
    """The stream could not be parsed; `error` says where it went wrong."""

    error: ProtocolError

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return str(self.error)


ParseResult: TypeAlias = ParseSuccess | ParseFailure


def _discard(line: str) -> None:
    pass


def split_lines(text: str) -> list[str]:
    """Splits on \\n, \\r and \\r\\n; a trailing line break does not add an empty line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def case_from_fields(values: Sequence[str]) -> TestCase:
    """
    Maps the seven collected field values onto a TestCase.

    The reference driver stores the ACTUAL value in `expected` and the
    EXPECTED value in `actual`. That mapping is reproduced here and nowhere
    else.
    """
    return TestCase(
        passed=values[_PASSED],
        name=values[_NAME],
        expected=values[_ACTUAL],
        actual=values[_EXPECTED],
        description=values[_DESCRIPTION],
        reason=values[_REASON],
    )


def _read_value(lines: Iterator[str]) -> tuple[str, str | None]:
    """Collects value lines up to the next tag line; returns the value and that line."""
    collected: list[str] = []
    line = next(lines, None)
    while line is not None and not line.startswith(START_TAG):
        collected.append(line)
        line = next(lines, None)
    return "\n".join(collected), line


def parse_lines(lines: Iterable[str], sink: DiagnosticSink | None = None) -> ParseSuccess:
    """
    Parses the protocol from a sequence of lines.

    Raises a ProtocolError subclass on the first structural problem.
    """
    emit = sink or _discard
    stream = iter(lines)

    # 1. Skip unstructured output up to the size marker.
    for line in stream:
        emit(line)
        if line == SIZE_TAG:
            break
    else:
        emit("\tERROR: No lines to read")
        raise MissingSizeMarkerError(SIZE_TAG)

    # 2. Declared case count.
    count_line = next(stream, None)
    if count_line is None:
        emit(f"\tERROR: No lines after {SIZE_TAG}")
        raise InvalidCaseCountError(None)
    if not _CASE_COUNT.fullmatch(count_line):
        emit(f"\tERROR: No integer after {SIZE_TAG}")
        raise InvalidCaseCountError(count_line)
    # A negative count is accepted and yields no records.
    total_cases = int(count_line)

    # 3. Records.
    cases: list[TestCase] = []
    bugnumber: str | None = None
    line = next(stream, None)
    for index in range(total_cases):
        values: list[str] = []
        for tag in FIELD_TAGS:
            if line is None:
                emit(f"\tERROR: Output ended in case {index + 1} of {total_cases}")
                raise TruncatedStreamError(index, total_cases)
            if not line.startswith(tag):
                emit(f"line didn't start with {tag}:{line}")
                raise TagMismatchError(tag, line)
            value, line = _read_value(stream)
            values.append(value)

        case = case_from_fields(values)
        cases.append(case)
        bugnumber = values[_BUGNUMBER]
        log.debug("Parsed test case", index=index, name=case.name, passed=case.passed)

    return ParseSuccess(total_cases=total_cases, cases=cases, bugnumber=bugnumber)


def parse_output(text: str, sink: DiagnosticSink | None = None) -> ParseResult:
    """
    Parses captured standard output into a typed result.

    Protocol errors are returned as ParseFailure and never raised.
    """
    try:
        result = parse_lines(split_lines(text), sink=sink)
    except ProtocolError as e:
        log.warning("Failed to parse test output", error=str(e), error_type=type(e).__name__)
        return ParseFailure(error=e)

    log.debug("Parsed test output", total_cases=result.total_cases, parsed=len(result.cases))
    return result


# 🔼⚙️
