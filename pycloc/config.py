import json
import os
import sys
from pathlib import Path

DEFAULT_CONFIG_NAME = "pycloc.json"

# Variables d'environnement prioritaires sur le fichier
ENV_CONFIG = "PYCLOC_CONFIG"
ENV_EXECUTABLE = "PYCLOC_EXECUTABLE"
ENV_TRANSCRIPT = "PYCLOC_TRANSCRIPT"
ENV_VERBOSE = "PYCLOC_VERBOSE"


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


class ConfigLoader:
    def __init__(
        self,
        config_file: str | Path | None = None,
        environ: dict | None = None,
        load_file: bool = True,
    ):
        self.environ = dict(os.environ if environ is None else environ)

        # Détection du fichier : argument explicite, puis PYCLOC_CONFIG, puis ./pycloc.json
        if config_file is None:
            raw = (self.environ.get(ENV_CONFIG) or "").strip()
            config_file = Path(raw) if raw else Path.cwd() / DEFAULT_CONFIG_NAME

        self.config_file = Path(config_file)
        self.config = self._load_config() if load_file else {}

    def _load_config(self) -> dict:
        """Load the optional JSON config file.

        A missing file is not an error (empty config). Invalid JSON, or a
        document that is not an object, raises ValueError.
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{self.config_file} is invalid JSON: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"{self.config_file} must contain a JSON object")
        return data

    def _get(self, env_key: str, config_key: str):
        raw = self.environ.get(env_key)
        if raw is not None and raw.strip():
            return raw.strip()
        return self.config.get(config_key)

    def get_executable(self) -> str | None:
        value = self._get(ENV_EXECUTABLE, "executable")
        return str(value) if value else None

    def get_transcript(self) -> Path | None:
        value = self._get(ENV_TRANSCRIPT, "transcript")
        return Path(str(value)).expanduser() if value else None

    def is_verbose(self) -> bool:
        return _as_bool(self._get(ENV_VERBOSE, "verbose"))


def _boot_config() -> ConfigLoader:
    try:
        return ConfigLoader()
    except ValueError as e:
        # Fichier invalide : on garde uniquement l'environnement
        print(f"pycloc boot error: {e}", file=sys.stderr)
        return ConfigLoader(load_file=False)


# Instance globale simple pour usage rapide
GLOBAL_CONFIG = _boot_config()
