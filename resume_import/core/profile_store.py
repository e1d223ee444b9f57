"""
Single-profile-per-user store.

An import replaces whatever profile the user had before (upsert). Stored
profiles are copied on the way in and on the way out so callers never hold a
reference into the store.
"""

import logging
import threading
from typing import Dict, Optional

from resume_import.core.errors import ProfileNotFoundError, ProfileValidationError
from resume_import.core.schemas import ExtractedProfile, ProfileUpdate

logger = logging.getLogger(__name__)


class InMemoryProfileStore:
    def __init__(self):
        self._profiles: Dict[str, ExtractedProfile] = {}
        self._lock = threading.Lock()

    def upsert(self, user_id: str, profile: ExtractedProfile) -> ExtractedProfile:
        with self._lock:
            replaced = user_id in self._profiles
            self._profiles[user_id] = profile.model_copy(deep=True)
            stored = self._profiles[user_id].model_copy(deep=True)
        logger.info("%s profile for user %s", "Replaced" if replaced else "Created", user_id)
        return stored

    def get(self, user_id: str) -> Optional[ExtractedProfile]:
        with self._lock:
            profile = self._profiles.get(user_id)
            return profile.model_copy(deep=True) if profile else None

    def update(self, user_id: str, changes: ProfileUpdate) -> ExtractedProfile:
        """
        Apply a partial edit. Only fields the caller explicitly set are changed.

        Raises:
            ProfileNotFoundError: the user has no stored profile
            ProfileValidationError: the edit would leave neither name nor email
        """
        with self._lock:
            current = self._profiles.get(user_id)
            if current is None:
                raise ProfileNotFoundError(user_id)
            merged = ExtractedProfile.model_validate({**current.model_dump(), **changes.changes()})
            if not merged.is_valid:
                raise ProfileValidationError(["name", "email"])
            self._profiles[user_id] = merged
            return merged.model_copy(deep=True)

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self._profiles.pop(user_id, None) is not None
