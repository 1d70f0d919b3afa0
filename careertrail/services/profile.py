"""User profile: display details and notification preferences."""
import logging

from sqlalchemy.orm import Session

from careertrail.db.models import DEFAULT_PROFILE_PREFERENCES, User, UserProfile
from careertrail.errors import NotFoundError
from careertrail.schemas import NotificationPreferences, ProfileUpdate

logger = logging.getLogger(__name__)


def get_profile(session: Session, user_id: str) -> UserProfile:
    """The user's profile, created with defaults on first access.

    The default display name is the local part of the user's email.
    """
    profile = session.get(UserProfile, user_id)
    if profile is not None:
        return profile
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    profile = UserProfile(
        user_id=user_id,
        display_name=user.email.split("@")[0],
        preferences=dict(DEFAULT_PROFILE_PREFERENCES),
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info(f"Created default profile for user {user_id}")
    return profile


def update_profile(session: Session, user_id: str, data: ProfileUpdate) -> UserProfile:
    profile = get_profile(session, user_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "preferences" and value is None:
            continue
        setattr(profile, field, value)
    session.commit()
    session.refresh(profile)
    return profile


def update_notification_preferences(
    session: Session, user_id: str, preferences: NotificationPreferences
) -> UserProfile:
    profile = get_profile(session, user_id)
    profile.preferences = preferences.model_dump()
    session.commit()
    session.refresh(profile)
    return profile
