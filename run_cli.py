"""
Run the health log CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    register        Create the user profile
    home            Greet the registered user
    fluid ...       Fluid intake: day, add, edit, delete, chart, calendar, report
    mood ...        Mood log: list, add, edit, delete, calendar, report

Examples:
    python run_cli.py fluid add 350 --time 08:30
    python run_cli.py fluid chart 2024-01-01
    python run_cli.py mood add Happy --comment "long walk"
    python run_cli.py mood report

Environment variables (all optional):
    DB_PATH               SQLite database file path (default: healthlog.db)
    EXPORT_DIR            Where PDF reports are written (default: ./reports)
    DEFAULT_DISPLAY_NAME  Greeting name when no profile exists (default: Guest)
    LOG_LEVEL             Root log level (default: WARNING)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
