"""
congregations/signals.py

Signal handlers for:
1. Audit logging of created / updated / deleted records
2. Logging a member's move between temples
"""
import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import Committee, Member, Pastor, Temple

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Member)
def track_temple_change(sender, instance, **kwargs):
    """
    Keep the member's previous temple on the instance so post_save
    can tell whether it changed.
    """
    if instance._state.adding:
        instance._old_temple_id = None
        return
    instance._old_temple_id = (
        Member.objects.filter(pk=instance.pk).values_list("temple_id", flat=True).first()
    )


@receiver(post_save, sender=Member)
def log_temple_move(sender, instance, created, **kwargs):
    old_temple_id = getattr(instance, "_old_temple_id", None)
    if not created and old_temple_id != instance.temple_id:
        logger.info(
            f"Member moved: {instance.display_name} "
            f"{old_temple_id or '-'} → {instance.temple_id or '-'}"
        )


@receiver(post_save, sender=Temple)
@receiver(post_save, sender=Pastor)
@receiver(post_save, sender=Member)
@receiver(post_save, sender=Committee)
def log_saved(sender, instance, created, **kwargs):
    action = "created" if created else "updated"
    logger.info(f"{sender._meta.verbose_name} {action}: {instance} ({instance.pk})")


@receiver(post_delete, sender=Temple)
@receiver(post_delete, sender=Pastor)
@receiver(post_delete, sender=Member)
@receiver(post_delete, sender=Committee)
def log_deleted(sender, instance, **kwargs):
    logger.info(f"{sender._meta.verbose_name} deleted: {instance} ({instance.pk})")
