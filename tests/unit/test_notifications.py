"""Tests for the toast queue."""
from careertrail.board.notifications import Notification, Notifier, ToastQueue


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_toasts_expire_after_ttl():
    clock = FakeClock()
    toasts = ToastQueue(ttl=4.0, clock=clock)
    toasts.notify(Notification("success", "Moved Acme to offer", created_at=clock()))

    clock.now += 3.9
    assert [n.message for n in toasts.active()] == ["Moved Acme to offer"]
    clock.now += 0.2
    assert toasts.active() == []
    assert len(toasts.history) == 1


def test_filter_by_level():
    toasts = ToastQueue()
    toasts.notify(Notification("success", "ok"))
    toasts.notify(Notification("error", "Failed to update job status: boom"))
    assert [n.message for n in toasts.of_level("error")] == ["Failed to update job status: boom"]


def test_toast_queue_is_a_notifier():
    assert isinstance(ToastQueue(), Notifier)
