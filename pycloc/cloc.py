"""Count blank lines, comment lines and physical lines of source code.

Typical use:

    report = pycloc.command().timeout(30).cores(4).target("src").lines_by_language()
    report["SUM"]["code"]
"""

from pathlib import Path

from pycloc.exceptions import ClocConfigurationError
from pycloc.executable import executable_path
from pycloc.invocation import Invocation
from pycloc.parser import OutputParser, ResponseParser
from pycloc.system_tools import CommandRunner

DEFAULT_FLAGS = ("json", "quiet")

BY_FILE = "--by-file"
BY_FILE_BY_LANG = "--by-file-by-lang"
ONLY_COUNT_FILES = "--only-count-files"
VERSION = "--version"


def _render_target(target: Path) -> str:
    # A relative name like "-x" would be read by cloc as an option
    rendered = str(target)
    if not target.is_absolute() and rendered.startswith("-"):
        return f"./{rendered}"
    return rendered


def _check_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ClocConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


class Cloc:
    """A configured cloc command bound to one target.

    The base invocation is never modified: every report method runs a copy
    with its own trailing flag, so one command can be reused for any number
    of reports.
    """

    def __init__(
        self,
        invocation: Invocation,
        runner: CommandRunner | None = None,
        response_parser: ResponseParser | None = None,
    ):
        self._invocation = invocation
        self._runner = runner or CommandRunner()
        self._response_parser = response_parser or ResponseParser()

    @property
    def invocation(self) -> Invocation:
        return self._invocation

    def _execute(self, invocation: Invocation) -> dict:
        result = self._runner.run(invocation)
        return self._response_parser.parse(result)

    def lines_by_language(self) -> dict:
        """Count physical lines of source code, reporting results by language."""
        return self._execute(self._invocation)

    def lines_by_file(self) -> dict:
        """Count physical lines of source code, reporting results by file."""
        return self._execute(self._invocation.with_argument(BY_FILE))

    def lines_by_file_and_language(self) -> dict:
        """Count physical lines of source code, reporting results by file and language."""
        return self._execute(self._invocation.with_argument(BY_FILE_BY_LANG))

    def count_files(self) -> dict:
        """Count files only, reporting results by language."""
        return self._execute(self._invocation.with_argument(ONLY_COUNT_FILES))

    def version(self) -> str:
        """Version string reported by the cloc executable."""
        invocation = Invocation(
            executable=self._invocation.executable,
            arguments=(VERSION,),
            cwd=self._invocation.cwd,
            timeout=self._invocation.timeout,
        )
        result = self._runner.run(invocation)
        if result.returncode != 0:
            # Reuse the error mapping of report runs
            self._response_parser.parse(result)
        return result.stdout.strip()


class ClocBuilder:
    """Step-by-step construction of Cloc commands.

    Each setter validates its input immediately and returns the builder.
    Boolean toggles add or remove a flag; flags and `--key=value`
    parameters are rendered in the order they were set.
    """

    def __init__(self):
        self._timeout = 0
        self._flags: dict[str, None] = dict.fromkeys(DEFAULT_FLAGS)
        self._parameters: dict[str, str] = {}
        self._executable: str | None = None
        self._output_parser: OutputParser | None = None
        self._cwd: str | None = None

    def _toggle(self, flag: str, value: bool) -> "ClocBuilder":
        if value:
            self._flags[flag] = None
        else:
            self._flags.pop(flag, None)
        return self

    def timeout(self, value: int) -> "ClocBuilder":
        """Timeout in seconds, or 0 for no timeout."""
        if _check_int("Timeout", value) < 0:
            raise ClocConfigurationError("Timeout must be greater than or equal to 0!")
        self._timeout = value
        return self

    def cores(self, value: int) -> "ClocBuilder":
        """Number of processes cloc may use; 0 or 1 disables multiprocessing.

        The value is passed through as-is, not capped to the machine's cores.
        """
        if _check_int("Number of cores", value) < 0:
            raise ClocConfigurationError("Number of cores must be greater than or equal to 0!")
        if value > 1:
            self._parameters["processes"] = str(value)
        else:
            self._parameters.pop("processes", None)
        return self

    def max_file_size(self, value: int) -> "ClocBuilder":
        """Skip files larger than `value` megabytes (cloc's default is 100).

        cloc needs roughly twenty times the largest file's size in memory.
        """
        if _check_int("Maximum file size", value) <= 0:
            raise ClocConfigurationError("Maximum file size must be greater than 0!")
        self._parameters["max-file-size"] = str(value)
        return self

    def docstring_as_code(self, value: bool) -> "ClocBuilder":
        """Treat docstrings as code instead of comments."""
        return self._toggle("docstring-as-code", value)

    def follow_links(self, value: bool) -> "ClocBuilder":
        """Follow symbolic links to directories (links to files are always followed)."""
        return self._toggle("follow-links", value)

    def no_recurse(self, value: bool) -> "ClocBuilder":
        """Do not descend into subdirectories of the target."""
        return self._toggle("no-recurse", value)

    def read_binary_files(self, value: bool) -> "ClocBuilder":
        """Process binary files in addition to text files."""
        return self._toggle("read-binary-files", value)

    def skip_uniqueness(self, value: bool) -> "ClocBuilder":
        """Skip the duplicate-file check: faster, but identical files are counted twice."""
        return self._toggle("skip-uniqueness", value)

    def executable(self, path: str | Path | None) -> "ClocBuilder":
        """Use a specific cloc executable; None restores automatic lookup."""
        self._executable = None if path is None else str(path)
        return self

    def output_parser(self, parser: OutputParser | None) -> "ClocBuilder":
        """Parser for this command only; None falls back to the process-wide one."""
        if parser is not None and not callable(parser):
            raise ClocConfigurationError("Output parser must be callable")
        self._output_parser = parser
        return self

    def cwd(self, path: str | Path | None) -> "ClocBuilder":
        self._cwd = None if path is None else str(path)
        return self

    def arguments(self) -> list[str]:
        """Option arguments as they will follow the target path."""
        args = [f"--{flag}" for flag in self._flags]
        args.extend(f"--{key}={value}" for key, value in self._parameters.items())
        return args

    def target(self, path: str | Path) -> Cloc:
        """Create a command targeting `path`.

        Raises:
          TypeError: path is None.
          ClocConfigurationError: path does not exist.
          ClocExecutableNotFoundError: no cloc executable is available.
        """
        if path is None:
            raise TypeError("Path must not be None!")
        target = Path(path)
        if not target.exists():
            raise ClocConfigurationError(f"Unable to read: {path}")

        invocation = Invocation(
            executable=self._executable or executable_path(),
            arguments=(_render_target(target), *self.arguments()),
            cwd=self._cwd,
            timeout=self._timeout,
        )
        return Cloc(invocation, response_parser=ResponseParser(self._output_parser))


def command() -> ClocBuilder:
    """Obtain a new builder for constructing a cloc command."""
    return ClocBuilder()
