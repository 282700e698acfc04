"""Python binding for the cloc line counter."""

from pycloc.cloc import Cloc, ClocBuilder, command
from pycloc.exceptions import (
    ClocConfigurationError,
    ClocError,
    ClocExecutableNotFoundError,
    ClocExecutionError,
    ClocOutputError,
    ClocTimeoutError,
)
from pycloc.executable import executable_path
from pycloc.invocation import Invocation
from pycloc.parser import get_output_parser, set_output_parser

__all__ = [
    "__version__",
    "Cloc",
    "ClocBuilder",
    "ClocConfigurationError",
    "ClocError",
    "ClocExecutableNotFoundError",
    "ClocExecutionError",
    "ClocOutputError",
    "ClocTimeoutError",
    "Invocation",
    "command",
    "executable_path",
    "get_output_parser",
    "set_output_parser",
]

__version__ = "0.1.0"
