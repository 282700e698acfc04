import sys
from datetime import datetime
from pathlib import Path

from pycloc.config import GLOBAL_CONFIG


class ConsoleManager:
    """Library-side console: quiet by default, optional transcript file.

    Messages reach stderr only in verbose mode. When a transcript path is
    configured, every message is also appended to it with a timestamp.
    """

    def __init__(self, verbose: bool | None = None, transcript_file: Path | None = None):
        self.verbose = GLOBAL_CONFIG.is_verbose() if verbose is None else bool(verbose)
        self.transcript_file = transcript_file if transcript_file is not None else GLOBAL_CONFIG.get_transcript()

    def _write_to_transcript(self, text: str, prefix: str = ""):
        """Écrit dans le fichier log sans perturber l'appelant."""
        if self.transcript_file is None:
            return
        timestamp = datetime.now().strftime("[%H:%M:%S]")
        try:
            self.transcript_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.transcript_file, "a", encoding="utf-8") as f:
                f.write(f"{timestamp} {prefix}{text}\n")
        except OSError as e:
            # Fallback silencieux pour ne pas casser un comptage si le log échoue
            sys.stderr.write(f"[LOG ERROR] {e}\n")

    def print(self, message: str):
        if self.verbose:
            print(message, file=sys.stderr)
        self._write_to_transcript(message, prefix="[PYCLOC] >> ")

    def debug(self, message: str):
        if self.verbose:
            print(f"DEBUG: {message}", file=sys.stderr)
        self._write_to_transcript(message, prefix="[DEBUG]  .. ")

    def error(self, message: str):
        if self.verbose:
            print(f"ERROR: {message}", file=sys.stderr)
        self._write_to_transcript(message, prefix="[ERROR]  !! ")


# Instance globale
GLOBAL_CONSOLE = ConsoleManager()
