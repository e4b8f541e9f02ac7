import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .activity import activity_logged
from .models import Activity, UserAccount

log = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_account(sender, instance, created, **kwargs):
    if created:
        UserAccount.objects.get_or_create(user=instance)


@receiver(activity_logged)
def record_activity(sender, user_id, action, status, **kwargs):
    """
    Insert the audit row inside the caller's transaction so it commits or
    rolls back together with the state change it describes.
    """
    activity = Activity.objects.create(user_id=user_id, action=action, status=status)
    transaction.on_commit(lambda: push_activity(activity))
    return activity


def push_activity(activity):
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(
            f"user_{activity.user_id}",
            {
                "type": "activity.created",
                "activity": {
                    "id": activity.id,
                    "action": activity.action,
                    "status": activity.status,
                    "createdAt": activity.created_at.isoformat(),
                },
            },
        )
    except Exception:
        log.exception("Failed to push activity %s to user %s", activity.id, activity.user_id)
