"""
application.dto - Data Transfer Objects for service input/output.

These are the structured inputs and results that services exchange with
callers (the CLI adapter and tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ProfileForm:
    """Raw registration/profile input, exactly as typed."""
    fullName: str = ""
    contact: str = ""
    bloodType: str = ""
    email: str = ""
    dob: str = ""


@dataclass(frozen=True)
class ReportSpec:
    """Static description of one exportable report."""
    title: str
    columns: tuple[str, ...]
    filename: str
    accent_color: str
    dialog_title: str


@dataclass(frozen=True)
class ExportResult:
    """Outcome of an export request.

    On failure ``message`` holds the generic alert to show the user.
    """
    ok: bool
    path: Optional[Path] = None
    row_count: int = 0
    message: str = ""
