"""Manages the ~/.prodrec directory structure."""

import os
from pathlib import Path


class ProdRecPaths:
    """Manages paths within the prodrec data directory.

    Directory structure:
        ~/.prodrec/
            config.yaml     # Optional user configuration
            prodrec.db      # SQLite database
            files/          # Blob store root
                records/<record_id>/v<version>/<filename>
            logs/
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        """Initialize paths.

        Args:
            base_dir: Override base directory. Defaults to PRODREC_DATA_DIR,
                      then ~/.prodrec. Useful for testing.
        """
        if base_dir is None:
            env_dir = os.environ.get("PRODREC_DATA_DIR")
            base_dir = Path(env_dir).expanduser() if env_dir else Path.home() / ".prodrec"
        self._base = base_dir

    @property
    def base(self) -> Path:
        return self._base

    @property
    def config_file(self) -> Path:
        return self._base / "config.yaml"

    @property
    def database_file(self) -> Path:
        return self._base / "prodrec.db"

    @property
    def files_dir(self) -> Path:
        """Blob store root."""
        return self._base / "files"

    @property
    def logs_dir(self) -> Path:
        return self._base / "logs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._base.mkdir(parents=True, exist_ok=True)
        self.files_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
