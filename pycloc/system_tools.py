import os
import signal
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Callable

from pycloc.console import GLOBAL_CONSOLE
from pycloc.exceptions import ClocExecutionError, ClocTimeoutError
from pycloc.invocation import Invocation


@dataclass(frozen=True)
class ExecutionResult:
    returncode: int
    stdout: str
    stderr: str
    duration_s: float = 0.0


class CommandRunner:
    """Blocking runner for a single cloc invocation.

    Security / resource model:
      - Never uses shell=True; the argument list is passed as-is.
      - stdout/stderr are captured as text (UTF-8, undecodable bytes replaced).
      - With a timeout, the child runs in its own session so that the whole
        process group (cloc forks workers with --processes) can be killed.
      - Pipes are closed and the child reaped on every exit path.
    """

    def __init__(
        self,
        popen_fn: Callable[..., subprocess.Popen] = subprocess.Popen,
        monotonic_fn: Callable[[], float] = time.monotonic,
    ):
        self._popen = popen_fn
        self._monotonic = monotonic_fn

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        if sys.platform != "win32":
            try:
                os.killpg(proc.pid, signal.SIGKILL)
                return
            except (ProcessLookupError, PermissionError):
                pass
        try:
            proc.kill()
        except ProcessLookupError:
            pass

    def run(self, invocation: Invocation) -> ExecutionResult:
        """Run `invocation` and wait for it.

        Raises:
          ClocTimeoutError: the run exceeded `invocation.timeout` seconds.
          ClocExecutionError: the executable could not be started.
        """
        command = invocation.command_line()
        timeout = invocation.timeout if invocation.timeout > 0 else None
        GLOBAL_CONSOLE.debug(f"Running: {invocation}")

        started = self._monotonic()
        try:
            proc = self._popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=invocation.cwd,
                start_new_session=sys.platform != "win32",
            )
        except OSError as e:
            GLOBAL_CONSOLE.error(f"Failed to start {invocation.executable}: {e}")
            raise ClocExecutionError(f"Failed to start {invocation.executable}: {e}") from e

        with proc:
            try:
                out, err = proc.communicate(timeout=timeout)
            except subprocess.TimeoutExpired:
                self._kill(proc)
                # Drain whatever was produced so the pipes can be closed.
                _out, err = proc.communicate()
                GLOBAL_CONSOLE.error(f"cloc timed out after {invocation.timeout}s: {invocation}")
                raise ClocTimeoutError(invocation.timeout, stderr=err or "")
            except BaseException:
                self._kill(proc)
                proc.wait()
                raise

        duration = self._monotonic() - started
        GLOBAL_CONSOLE.debug(f"cloc exited with code {proc.returncode} in {duration:.2f}s")
        return ExecutionResult(
            returncode=int(proc.returncode),
            stdout=out or "",
            stderr=err or "",
            duration_s=duration,
        )
