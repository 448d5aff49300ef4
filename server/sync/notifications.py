"""
Role-aware alert evaluation over the chat and activity caches.

Alerts are driven by watermarks: the last observed count of counterpart
chat messages and of station assignments. An alert fires when the current
count is above the watermark, and the watermark always moves to the
current count afterwards.
"""
from typing import NamedTuple

COUNTERPART = {
    'admin': 'supervisor',
    'supervisor': 'admin',
}

CHAT_ALERTS = {
    'admin': 'New message from a supervisor!',
    'supervisor': 'New message from the Admin!',
}

ASSIGNMENT_ALERT = 'A new station has been assigned!'


class NotificationResult(NamedTuple):
    chat_alert: bool
    activity_alert: bool
    chat_count: int
    activity_count: int


def count_counterpart_chats(role, chats):
    counterpart = COUNTERPART.get(role)
    if counterpart is None:
        return 0
    return sum(1 for chat in chats if chat.get('sender') == counterpart)


def count_assignments(activities):
    return sum(1 for activity in activities if activity.get('action') == 'station_assign')


def evaluate(role, chats, previous_chat_count, activities, previous_activity_count):
    """
    Decide which alerts to raise for `role`.

    Admins hear about supervisor messages and supervisors about admin
    messages. Assignment alerts are for admins only, but the assignment
    watermark is tracked for every role.
    """
    chat_count = count_counterpart_chats(role, chats)
    activity_count = count_assignments(activities)
    return NotificationResult(
        chat_alert=chat_count > previous_chat_count,
        activity_alert=role == 'admin' and activity_count > previous_activity_count,
        chat_count=chat_count,
        activity_count=activity_count,
    )


class NotificationEngine:
    """Holds the watermarks for one dashboard session."""

    def __init__(self, role):
        self.role = role
        self.chat_watermark = 0
        self.activity_watermark = 0

    def evaluate(self, chats, activities):
        result = evaluate(self.role, chats, self.chat_watermark, activities, self.activity_watermark)
        self.chat_watermark = result.chat_count
        self.activity_watermark = result.activity_count
        return result

    def reset(self):
        self.chat_watermark = 0
        self.activity_watermark = 0
