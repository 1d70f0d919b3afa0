"""Per-user UI preferences (currently the active dashboard tab)."""
from sqlalchemy.orm import Session

from careertrail.db.models import DASHBOARD_TABS, UserPreference


def get_preferences(session: Session, user_id: str) -> UserPreference:
    """Stored preferences, or unsaved defaults if the user never set any."""
    prefs = session.get(UserPreference, user_id)
    if prefs is None:
        return UserPreference(user_id=user_id, active_tab="list")
    return prefs


def set_active_tab(session: Session, user_id: str, tab: str) -> UserPreference:
    if tab not in DASHBOARD_TABS:
        raise ValueError(f"Unknown tab '{tab}' (expected one of {DASHBOARD_TABS})")
    prefs = session.get(UserPreference, user_id)
    if prefs is None:
        prefs = UserPreference(user_id=user_id)
        session.add(prefs)
    prefs.active_tab = tab
    session.commit()
    session.refresh(prefs)
    return prefs
