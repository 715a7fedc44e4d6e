"""
Profile Storage Module
Holds per-user tailoring profiles in process memory. Nothing is persisted;
profiles are lost on restart.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_TONE = 'neutral'


class ProfileValidationError(ValueError):
    """Raised when a profile submission is missing required fields."""


class ProfileNotFoundError(KeyError):
    """Raised when no profile exists for a user id."""


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class Profile:
    """Represents a single user's tailoring profile"""
    user_id: str
    industry: str
    goals: Optional[List[str]] = field(default_factory=list)
    tone: Optional[str] = DEFAULT_TONE
    experience_level: Optional[str] = None
    updated_at: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'userId': self.user_id,
            'industry': self.industry,
            'goals': list(self.goals) if isinstance(self.goals, list) else self.goals,
            'tone': self.tone,
            'experienceLevel': self.experience_level,
            'updatedAt': self.updated_at,
        }

    @property
    def primary_goal(self) -> Optional[str]:
        if isinstance(self.goals, list) and self.goals:
            return self.goals[0]
        return None


class ProfileStorage:
    """
    Manages in-memory profile storage.

    Every upsert replaces the whole record under a lock, so readers never see
    a partially written profile. Concurrent upserts for the same user id are
    last-write-wins.
    """

    def __init__(self):
        self._profiles: Dict[str, Profile] = {}
        self._lock = threading.Lock()

    def validate_profile_data(self, data: Dict[str, Any]) -> Tuple[bool, str]:
        """Validate an onboarding submission"""
        for field_name in ('userId', 'industry'):
            value = data.get(field_name)
            if not value:
                return False, "userId and industry are required"
        return True, "Valid"

    def upsert_profile(self, user_id: str, industry: str,
                       goals: Optional[List[str]] = (),
                       tone: Optional[str] = DEFAULT_TONE,
                       experience_level: Optional[str] = None) -> Profile:
        """
        Create or fully replace the profile for ``user_id``.

        ``goals`` and ``tone`` fall back to their defaults only when omitted;
        an explicit ``None`` or empty value is stored as given.

        Raises:
            ProfileValidationError: If user_id or industry is missing or empty
        """
        is_valid, message = self.validate_profile_data({'userId': user_id, 'industry': industry})
        if not is_valid:
            raise ProfileValidationError(message)

        profile = Profile(
            user_id=user_id,
            industry=industry,
            goals=list(goals) if isinstance(goals, (list, tuple)) else goals,
            tone=tone,
            experience_level=experience_level,
            updated_at=utc_timestamp(),
        )
        with self._lock:
            replaced = user_id in self._profiles
            self._profiles[user_id] = profile

        logger.info(f"Profile {'replaced' if replaced else 'created'} for user {user_id}")
        return profile

    def get_profile(self, user_id: str) -> Profile:
        """
        Raises:
            ProfileNotFoundError: If no profile exists for ``user_id``
        """
        with self._lock:
            profile = self._profiles.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    def find_profile(self, user_id: Optional[str]) -> Optional[Profile]:
        if not user_id:
            return None
        with self._lock:
            return self._profiles.get(user_id)

    def count(self) -> int:
        with self._lock:
            return len(self._profiles)
