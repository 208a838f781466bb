"""
congregations/lookups.py

Resolve foreign ids to display labels for list views. Unset ids and
dangling ids get sentinel labels instead of raising, so a stale reference
never breaks a listing.
"""
from django.conf import settings

from .store import store_for

# Wire key holding a reference -> (target collection, wire key for its label)
REFERENCE_FIELDS = {
    "temples":    {"pastorPrincipalId": ("pastors", "pastorPrincipalName")},
    "pastors":    {"temploId": ("temples", "temploName")},
    "members":    {"temploId": ("temples", "temploName")},
    "committees": {
        "temploId": ("temples", "temploName"),
        "liderId":  ("members", "liderName"),
    },
}


class NameResolver:

    def __init__(self, unassigned_label=None, not_found_label=None):
        self.unassigned_label = unassigned_label or settings.UNASSIGNED_LABEL
        self.not_found_label  = not_found_label or settings.NOT_FOUND_LABEL

    def resolve_name(self, collection, pk):
        return self.resolve_names(collection, [pk])[pk]

    def resolve_names(self, collection, ids):
        """Resolve many ids with a single query."""
        ids     = list(ids)
        wanted  = {pk for pk in ids if pk}
        model   = store_for(collection).model
        found   = model.objects.in_bulk(list(wanted)) if wanted else {}

        labels = {}
        for pk in ids:
            if not pk:
                labels[pk] = self.unassigned_label
            elif pk in found:
                labels[pk] = found[pk].display_name
            else:
                labels[pk] = self.not_found_label
        return labels

    def annotate(self, collection, rows):
        """Add the *Name label next to every reference field of serialised rows."""
        for key, (target, label_key) in REFERENCE_FIELDS.get(collection, {}).items():
            labels = self.resolve_names(target, [row[key] for row in rows])
            for row in rows:
                row[label_key] = labels[row[key]]
        return rows
