"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from environment or passed
explicitly (tests build it directly with a temporary db_path).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the health log.

    No module-level globals. Construct via from_env() or pass explicitly.
    """
    # Database
    db_path: str = "healthlog.db"

    # Finished reports are moved here before being shared.
    export_dir: Path = Path("./reports")

    # Shown on the home screen when no profile has been registered.
    default_display_name: str = "Guest"

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, project_root: Optional[Path] = None) -> Settings:
        """Build Settings from environment variables (and a .env file)."""
        from dotenv import load_dotenv
        load_dotenv()

        root = project_root or Path.cwd()

        return cls(
            db_path=os.getenv("DB_PATH", str(root / "healthlog.db")),
            export_dir=Path(os.getenv("EXPORT_DIR", str(root / "reports"))).expanduser(),
            default_display_name=os.getenv("DEFAULT_DISPLAY_NAME", "Guest"),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )
