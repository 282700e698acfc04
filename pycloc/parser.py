import json
import threading
from collections.abc import Mapping
from typing import Any, Callable

from pycloc.console import GLOBAL_CONSOLE
from pycloc.exceptions import ClocExecutionError, ClocOutputError
from pycloc.system_tools import ExecutionResult

OutputParser = Callable[[str], Any]

DEFAULT_OUTPUT_PARSER: OutputParser = json.loads

_parser_lock = threading.Lock()
_output_parser: OutputParser = DEFAULT_OUTPUT_PARSER


def set_output_parser(parser: OutputParser | None) -> None:
    """Set the process-wide parser used to turn cloc's JSON text into a tree.

    Pass None to restore the default (`json.loads`).
    """
    global _output_parser
    if parser is not None and not callable(parser):
        raise TypeError("Output parser must be callable")
    with _parser_lock:
        _output_parser = DEFAULT_OUTPUT_PARSER if parser is None else parser


def get_output_parser() -> OutputParser:
    with _parser_lock:
        return _output_parser


class ResponseParser:
    """Convert a finished cloc run into a report dict.

    The counts are not interpreted: whatever object the output parser
    produces is returned as a plain dict.
    """

    def __init__(self, output_parser: OutputParser | None = None):
        self.output_parser = output_parser

    def _parser(self) -> OutputParser:
        return self.output_parser if self.output_parser is not None else get_output_parser()

    def parse(self, result: ExecutionResult) -> dict:
        if result.returncode != 0:
            message = (result.stderr or "").strip() or f"cloc exited with code {result.returncode}"
            GLOBAL_CONSOLE.error(message)
            raise ClocExecutionError(message, returncode=result.returncode, stderr=result.stderr)

        text = result.stdout or ""
        # cloc prints nothing when there is nothing to count
        if not text.strip():
            return {}

        try:
            tree = self._parser()(text)
        except Exception as e:
            raise ClocOutputError(f"Failed to parse cloc output: {e}") from e

        if not isinstance(tree, Mapping):
            raise ClocOutputError("Unexpected output format!")
        return dict(tree)
