"""
application.services.validation - Field rules and input normalization.

Every check is fail-fast: the first violated rule raises ValidationError
and later rules are not evaluated. Nothing here touches the store, so a
rejected form never produces a write.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from domain.entities import FluidIntakeEntry, Mood, UserProfile
from domain.exceptions import ValidationError
from application.dto import ProfileForm

BLOOD_TYPES: tuple[str, ...] = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
CONTACT_PATTERN = re.compile(r"[0-9+\s()-]{8,}")
BLOOD_TYPE_PATTERN = re.compile(r"(A|B|AB|O)[+-]", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
DOB_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")

DEFAULT_TIME = "12:00"

_PROFILE_FIELDS = ("fullName", "contact", "bloodType", "email", "dob")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def validate_profile(form: ProfileForm) -> UserProfile:
    """Check a profile form and return the normalized profile.

    bloodType is stored uppercase and email lowercase; other fields are
    kept exactly as typed.
    """
    for name in _PROFILE_FIELDS:
        if not getattr(form, name):
            raise ValidationError(name, "Please fill in all fields")

    if not NAME_PATTERN.fullmatch(form.fullName):
        raise ValidationError(
            "fullName", "Full Name should only contain letters and spaces",
        )
    if not CONTACT_PATTERN.fullmatch(form.contact):
        raise ValidationError("contact", "Please enter a valid phone number")
    if not BLOOD_TYPE_PATTERN.fullmatch(form.bloodType):
        raise ValidationError(
            "bloodType", "Blood Type should be one of A+, B-, O+, etc.",
        )
    if not EMAIL_PATTERN.fullmatch(form.email):
        raise ValidationError("email", "Please enter a valid email address")
    if not DOB_PATTERN.fullmatch(form.dob):
        raise ValidationError("dob", "Date of Birth must be in YYYY-MM-DD format")

    return UserProfile(
        fullName=form.fullName,
        contact=form.contact,
        bloodType=form.bloodType.upper(),
        email=form.email.lower(),
        dob=form.dob,
    )


def format_dob_input(raw: str) -> str:
    """Progressive YYYY-MM-DD formatter for a date-of-birth text field.

    Applied on every keystroke: keeps digits only, puts a dash after the
    year and after the month, and caps the result at 10 characters.
    Reapplying it to its own output returns the same string.
    """
    digits = re.sub(r"[^0-9]", "", raw)
    if 4 < len(digits) <= 6:
        formatted = f"{digits[:4]}-{digits[4:]}"
    elif len(digits) > 6:
        formatted = f"{digits[:4]}-{digits[4:6]}-{digits[6:8]}"
    else:
        formatted = digits
    return formatted[:10]


# ---------------------------------------------------------------------------
# Log entries
# ---------------------------------------------------------------------------

def parse_calendar_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError("date", f"'{value}' is not a valid YYYY-MM-DD date") from None


def ensure_not_future(value: str, today: Optional[date] = None) -> str:
    """Reject calendar selections after today."""
    if parse_calendar_date(value) > (today or date.today()):
        raise ValidationError("date", "You cannot add data for future dates.")
    return value


def parse_intake_form(amount: str, time_input: str, selected_date: str) -> FluidIntakeEntry:
    """Build a fluid entry from the add/edit form.

    The amount only has to be non-empty; whether it parses as a number is
    settled later, when the day is aggregated.
    """
    if not amount or not TIME_PATTERN.fullmatch(time_input or ""):
        raise ValidationError(
            "amount", "Please enter a valid amount and time in HH:MM format.",
        )
    parse_calendar_date(selected_date)
    return FluidIntakeEntry(amount=amount, timestamp=f"{selected_date}T{time_input}:00")


def validate_mood(mood: str) -> str:
    if not mood:
        raise ValidationError("mood", "Please select a mood")
    try:
        return Mood(mood).value
    except ValueError:
        raise ValidationError("mood", f"Unknown mood '{mood}'") from None
