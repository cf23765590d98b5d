import pytest

from Dungeon.ui import notification
from Dungeon.ui.notification import DANGER, MAX_COUNT, add_notification, notifications


def test_duplicates_are_refreshed_not_stacked():
    add_notification("Piège désamorcé.")
    first = notifications[0]["start"]
    add_notification("Piège désamorcé.", DANGER)
    assert len(notifications) == 1
    assert notifications[0]["start"] >= first
    assert notifications[0]["kind"] == DANGER


def test_oldest_is_dropped():
    for i in range(MAX_COUNT + 2):
        add_notification(f"message {i}")
    assert len(notifications) == MAX_COUNT
    assert notifications[0]["raw"] == "message 2"


def test_empty_and_unknown_kind():
    add_notification("")
    assert notifications == []
    with pytest.raises(ValueError):
        add_notification("?", "fanfare")


def test_fade_out():
    assert notification._alpha(0.0) == 1.0
    assert notification._alpha(notification.DURATION + notification.FADE_TIME / 2) == pytest.approx(0.5)
    assert notification._alpha(notification.DURATION + 10) == 0.0


def test_game_events_are_announced(world):
    from Dungeon.gameplay.simulation import tick

    tick(world, 1 / 60)
    assert [n["raw"] for n in notifications] == ["Victoire ! Le donjon est vidé."]
