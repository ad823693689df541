"""
application.services.profile - Registration and the single user profile.

Forms are validated and normalized before anything is written; a form that
fails validation never reaches the store.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities import Category, UserProfile
from domain.exceptions import SchemaError, StoreIOError
from application.dto import ProfileForm
from application.services.record_store import RecordStore
from application.services.validation import validate_profile

logger = logging.getLogger(__name__)


class ProfileService:
    """Manages the user profile row."""

    def __init__(self, store: RecordStore, default_display_name: str = "Guest"):
        self._store = store
        self._default_display_name = default_display_name

    async def register(self, form: ProfileForm) -> int:
        """Validate, normalize and store a new profile. Returns its id."""
        profile = validate_profile(form)
        await self._store.ensure_schema(Category.PROFILE)
        profile_id = await self._store.insert(Category.PROFILE, profile)
        logger.info("Registered profile #%d", profile_id)
        return profile_id

    async def update(self, profile_id: int, form: ProfileForm) -> None:
        """Replace every field of an existing profile."""
        profile = validate_profile(form)
        await self._store.update(Category.PROFILE, profile_id, profile)

    async def get_profile(self) -> Optional[UserProfile]:
        await self._store.ensure_schema(Category.PROFILE)
        return await self._store.query_profile()

    async def display_name(self) -> str:
        """Name for the greeting; the configured default when unavailable.

        Storage problems are logged and answered with the default so the
        home view can always render.
        """
        try:
            profile = await self.get_profile()
        except (SchemaError, StoreIOError):
            logger.exception("Failed to load profile, using default display name")
            return self._default_display_name
        if profile is None or not profile.fullName:
            return self._default_display_name
        return profile.fullName
