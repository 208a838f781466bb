"""
congregations/validators.py

Reference checks run against the current database state before any
assignment is written. Nothing here mutates; every check either returns
None or raises ValidationConflict.
"""
from .exceptions import ValidationConflict
from .models import Temple
from .store import store_for


def parse_reference(value):
    """
    Normalise a foreign-key value from the wire.

    None, "" and whitespace mean "unassigned" and become None. Any other
    string is returned stripped. Non-string values are rejected.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationConflict(
            "Reference ids must be strings or null.", value=repr(value)
        )
    value = value.strip()
    return value or None


def validate_exists(collection, pk):
    if pk is None:
        return
    store = store_for(collection)
    if not store.exists(pk):
        raise ValidationConflict(
            f"{store.label} '{pk}' does not exist.",
            collection=collection,
            id=pk,
        )


def validate_pastor_assignment(temple_id, pastor_id):
    """
    A pastor may be principal of at most one temple. The temple being
    edited is exempt from the check against itself; temple_id is None when
    the temple has not been created yet.
    """
    if pastor_id is None:
        return
    validate_exists("pastors", pastor_id)

    others = Temple.objects.filter(principal_pastor_id=pastor_id)
    if temple_id is not None:
        others = others.exclude(pk=temple_id)
    existing = others.first()
    if existing is not None:
        pastor = existing.principal_pastor
        raise ValidationConflict(
            f"{pastor.display_name} is already principal pastor of "
            f"{existing.name} and cannot be reassigned.",
            existingTempleId=existing.pk,
            existingTempleName=existing.name,
        )
