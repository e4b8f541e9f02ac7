# store/activity.py
"""
Audit trail. Services announce state changes through ``activity_logged``;
the receiver in store.signals persists them.
"""
from django.dispatch import Signal

# kwargs: user_id, action, status
activity_logged = Signal()

COMPLETED = "Completed"
PENDING = "Pending"
APPROVED = "Approved"
REJECTED = "Rejected"


def log_activity(user_id, action, status=COMPLETED):
    activity_logged.send(sender=None, user_id=user_id, action=action, status=status)
