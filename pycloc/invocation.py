import shlex
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Invocation:
    """Immutable description of one cloc run.

    `arguments` starts with the target path, followed by the flags and
    `--key=value` parameters in the order they were configured. A timeout
    of 0 means the run is unbounded.
    """

    executable: str
    arguments: tuple[str, ...] = ()
    cwd: str | None = None
    timeout: int = 0

    def with_argument(self, value: str) -> "Invocation":
        """Return a copy with `value` appended to the argument list."""
        return replace(self, arguments=(*self.arguments, value))

    def command_line(self) -> list[str]:
        return [self.executable, *self.arguments]

    def __str__(self) -> str:
        return shlex.join(self.command_line())
