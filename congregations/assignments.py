"""
congregations/assignments.py

Multi-record writes that keep references consistent.

Temple.principal_pastor and Pastor.temple mirror each other:
    temple.principal_pastor_id == pastor.pk  <=>  pastor.temple_id == temple.pk

Every sequence here runs inside one transaction.atomic() block with row
locks taken temple-first, then pastors, so two reassignments touching the
same rows are serialised and a failure half-way leaves nothing behind.
"""
import logging

from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import PartialAssignmentFailure, ValidationConflict
from .models import Pastor, Temple
from .store import committees, members, pastors, temples
from .validators import validate_exists, validate_pastor_assignment

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════
# TEMPLE ↔ PASTOR
# ════════════════════════════════════════════════════════════
def assign_pastor(temple_id, pastor_id):
    """Make pastor_id the principal pastor of temple_id (None unassigns)."""
    with transaction.atomic():
        return _assign_pastor(temple_id, pastor_id)


def assign_temple_to_pastor(pastor_id, temple_id):
    """
    Pastor-side entry point. Setting a temple is the same operation as
    assigning the pastor from the temple's side; clearing it also clears
    the temple the pastor currently leads.
    """
    with transaction.atomic():
        pastor = pastors.get(pastor_id)
        validate_exists("temples", temple_id)
        _lock_temples(temple_id, *_temples_led_by(pastor.pk))
        return _assign_temple_to_pastor(pastor, temple_id)


def save_temple(pk, fields, pastor_id):
    """Create (pk=None) or replace a temple together with its principal pastor."""
    with transaction.atomic():
        validate_pastor_assignment(pk, pastor_id)
        if pk is None:
            temple = temples.create(**fields)
        else:
            temple = temples.update(pk, **fields)
        return _assign_pastor(temple.pk, pastor_id)


def save_pastor(pk, fields, temple_id):
    """Create (pk=None) or replace a pastor, routing temple_id through the temple-side rules."""
    with transaction.atomic():
        validate_exists("temples", temple_id)
        if pk is None:
            _lock_temples(temple_id)
            pastor = pastors.create(**fields)
        else:
            _lock_temples(temple_id, *_temples_led_by(pk))
            pastor = pastors.update(pk, **fields)
        return _assign_temple_to_pastor(pastor, temple_id)


def _assign_pastor(temple_id, pastor_id):
    temple = temples.get(temple_id, for_update=True)
    previous = temple.principal_pastor_id
    _lock_pastors(previous, pastor_id)
    validate_pastor_assignment(temple.pk, pastor_id)

    temple.principal_pastor_id = pastor_id
    try:
        with transaction.atomic():
            temple.save(update_fields=["principal_pastor", "updated_at"])
    except IntegrityError as exc:
        # Another temple claimed the pastor after validation
        logger.warning(f"Principal pastor collision on temple {temple.pk}: {exc}")
        raise ValidationConflict(
            f"Pastor '{pastor_id}' is already principal pastor of another temple.",
            pastorId=pastor_id,
        ) from exc

    try:
        _unlink_pastors(temple, keep=pastor_id)
        if pastor_id is not None:
            _link_pastor(temple, pastor_id)
    except (DatabaseError, Pastor.DoesNotExist) as exc:
        logger.error(
            f"Pastor sync failed for temple {temple.pk} "
            f"({previous} → {pastor_id}): {exc}"
        )
        raise PartialAssignmentFailure(
            f"Temple {temple.name} could not be updated because its pastor "
            f"records could not be synchronised. No changes were saved.",
            templeId=temple.pk,
            pastorId=pastor_id,
        ) from exc

    if previous != pastor_id:
        logger.info(f"Principal pastor of {temple.name}: {previous} → {pastor_id}")
    return temple


def _assign_temple_to_pastor(pastor, temple_id):
    if temple_id is not None:
        _assign_pastor(temple_id, pastor.pk)
    else:
        for led_id in _temples_led_by(pastor.pk):
            _assign_pastor(led_id, None)

    pastor.refresh_from_db()
    if temple_id is None and pastor.temple_id is not None:
        # Stale inverse pointer with no temple naming this pastor
        pastor.temple = None
        pastor.save(update_fields=["temple", "updated_at"])
    return pastor


def _unlink_pastors(temple, keep):
    stale = Pastor.objects.filter(temple=temple)
    if keep is not None:
        stale = stale.exclude(pk=keep)
    for pastor in stale:
        pastor.temple = None
        pastor.save(update_fields=["temple", "updated_at"])


def _link_pastor(temple, pastor_id):
    pastor = Pastor.objects.get(pk=pastor_id)
    if pastor.temple_id != temple.pk:
        pastor.temple = temple
        pastor.save(update_fields=["temple", "updated_at"])


def _temples_led_by(pastor_id):
    return list(
        Temple.objects.filter(principal_pastor_id=pastor_id).values_list("pk", flat=True)
    )


def _lock_temples(*temple_ids):
    ids = [pk for pk in temple_ids if pk is not None]
    if ids:
        list(Temple.objects.select_for_update().filter(pk__in=ids).order_by("pk"))


def _lock_pastors(*pastor_ids):
    ids = [pk for pk in pastor_ids if pk is not None]
    if ids:
        list(Pastor.objects.select_for_update().filter(pk__in=ids).order_by("pk"))


# ════════════════════════════════════════════════════════════
# MEMBER → TEMPLE
# ════════════════════════════════════════════════════════════
def assign_member_temple(member_id, temple_id):
    with transaction.atomic():
        member = members.get(member_id, for_update=True)
        validate_exists("temples", temple_id)
        member.temple_id = temple_id
        member.save(update_fields=["temple", "updated_at"])
    return member


def save_member(pk, fields, temple_id):
    with transaction.atomic():
        validate_exists("temples", temple_id)
        fields = dict(fields, temple_id=temple_id)
        if pk is None:
            return members.create(**fields)
        return members.update(pk, **fields)


# ════════════════════════════════════════════════════════════
# COMMITTEE → TEMPLE / LEADER
# ════════════════════════════════════════════════════════════
def assign_committee_leader(committee_id, leader_id):
    with transaction.atomic():
        committee = committees.get(committee_id, for_update=True)
        validate_exists("members", leader_id)
        committee.leader_id = leader_id
        committee.save(update_fields=["leader", "updated_at"])
    return committee


def assign_committee_temple(committee_id, temple_id):
    with transaction.atomic():
        committee = committees.get(committee_id, for_update=True)
        validate_exists("temples", temple_id)
        committee.temple_id = temple_id
        committee.save(update_fields=["temple", "updated_at"])
    return committee


def save_committee(pk, fields, temple_id, leader_id):
    with transaction.atomic():
        validate_exists("temples", temple_id)
        validate_exists("members", leader_id)
        fields = dict(fields, temple_id=temple_id, leader_id=leader_id)
        if pk is None:
            return committees.create(**fields)
        return committees.update(pk, **fields)
