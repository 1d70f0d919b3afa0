import pytest

from careertrail.services.preferences import get_preferences, set_active_tab


def test_defaults_to_list_without_saving(session, user):
    assert get_preferences(session, user.id).active_tab == "list"
    assert not session.new


def test_set_and_read_back(session, user):
    set_active_tab(session, user.id, "board")
    set_active_tab(session, user.id, "metrics")
    assert get_preferences(session, user.id).active_tab == "metrics"


def test_unknown_tab(session, user):
    with pytest.raises(ValueError, match="Unknown tab"):
        set_active_tab(session, user.id, "settings")
