import os
from collections.abc import Callable
from typing import Any

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_errors import ParserError
from monkey.monkey_parser import Parser

# Subprocess coverage for CLI runs; the collector teardown assertion breaks under act
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


ParseResult = tuple[Program, list[ParserError]]


@pytest.fixture  # type: ignore[misc]
def parse() -> Callable[[str], ParseResult]:
    def _parse(source: str) -> ParseResult:
        parser = Parser.from_source(source)
        program = parser.parse_program()
        return program, parser.errors()

    return _parse
