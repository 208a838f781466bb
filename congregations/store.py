"""
congregations/store.py

Entity Store: one EntityStore per collection wrapping the model manager.
Each call is atomic for a single record; multi-record consistency belongs
to congregations.assignments.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import ProtectedError

from .exceptions import DeleteConflict, NotFound, ValidationConflict
from .models import Committee, Member, Pastor, Temple

logger = logging.getLogger(__name__)


class EntityStore:

    def __init__(self, model, collection):
        self.model      = model
        self.collection = collection

    @property
    def label(self):
        return self.model._meta.verbose_name

    def get(self, pk, for_update=False):
        qs = self.model.objects.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=pk)
        except self.model.DoesNotExist:
            raise NotFound(f"{self.label} '{pk}' not found.", id=pk)

    def exists(self, pk):
        if pk is None:
            return False
        return self.model.objects.filter(pk=pk).exists()

    def list(self, **filters):
        return list(self.model.objects.filter(**filters))

    def create(self, **fields):
        obj = self.model(**fields)
        self._validate(obj)
        obj.save()
        return obj

    def update(self, pk, **fields):
        with transaction.atomic():
            obj = self.get(pk, for_update=True)
            for name, value in fields.items():
                setattr(obj, name, value)
            self._validate(obj)
            obj.save()
        return obj

    def delete(self, pk):
        with transaction.atomic():
            obj = self.get(pk, for_update=True)
            try:
                obj.delete()
            except ProtectedError as exc:
                references = [
                    _describe(ref) for ref in exc.protected_objects
                ]
                logger.warning(
                    f"Delete blocked: {self.label} {pk} referenced by {len(references)} record(s)"
                )
                raise DeleteConflict(
                    f"Could not delete {self.label.lower()} '{obj}', it may be in use.",
                    references=references,
                )

    def _validate(self, obj):
        try:
            obj.full_clean()
        except ValidationError as exc:
            raise ValidationConflict(
                f"Invalid {self.label.lower()} data.",
                errors=exc.message_dict,
            )


temples    = EntityStore(Temple, "temples")
pastors    = EntityStore(Pastor, "pastors")
members    = EntityStore(Member, "members")
committees = EntityStore(Committee, "committees")

STORES = {store.collection: store for store in (temples, pastors, members, committees)}


def store_for(collection):
    try:
        return STORES[collection]
    except KeyError:
        raise NotFound(f"Unknown collection '{collection}'.")


def _describe(obj):
    collection = next(
        (s.collection for s in STORES.values() if isinstance(obj, s.model)),
        obj._meta.model_name,
    )
    return {"collection": collection, "id": obj.pk, "name": str(obj)}
