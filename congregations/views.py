import functools
import json
import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from . import assignments
from .exceptions import RegistryError, ValidationConflict
from .forms import CommitteeForm, MemberForm, PastorForm, TempleForm
from .lookups import NameResolver
from .store import store_for
from .validators import parse_reference

logger = logging.getLogger(__name__)


# Per collection: payload form, save function and the wire keys that carry
# references (wire key -> keyword argument of the save function).
RESOURCES = {
    "temples": {
        "form":       TempleForm,
        "save":       assignments.save_temple,
        "references": {"pastorPrincipalId": "pastor_id"},
    },
    "pastors": {
        "form":       PastorForm,
        "save":       assignments.save_pastor,
        "references": {"temploId": "temple_id"},
    },
    "members": {
        "form":       MemberForm,
        "save":       assignments.save_member,
        "references": {"temploId": "temple_id"},
    },
    "committees": {
        "form":       CommitteeForm,
        "save":       assignments.save_committee,
        "references": {"temploId": "temple_id", "liderId": "leader_id"},
    },
}

# (collection, target) -> (assign function, legacy body key)
ASSIGNMENTS = {
    ("temples", "pastor"):    (assignments.assign_pastor, "pastorId"),
    ("pastors", "temple"):    (assignments.assign_temple_to_pastor, "temploId"),
    ("members", "temple"):    (assignments.assign_member_temple, "temploId"),
    ("committees", "leader"): (assignments.assign_committee_leader, "liderId"),
    ("committees", "temple"): (assignments.assign_committee_temple, "temploId"),
}


def api_view(*methods):
    """JSON endpoint: CSRF-exempt, method-restricted, RegistryError → JSON error body."""
    def decorator(view):
        @csrf_exempt
        @require_http_methods(list(methods))
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except RegistryError as exc:
                logger.warning(f"{request.method} {request.path} → {exc.status}: {exc.message}")
                return JsonResponse(exc.as_dict(), status=exc.status)
        return wrapper
    return decorator


def read_json(request):
    try:
        payload = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise ValidationConflict("Request body is not valid JSON.")
    if not isinstance(payload, dict):
        raise ValidationConflict("Request body must be a JSON object.")
    return payload


def _save(collection, pk, payload):
    resource   = RESOURCES[collection]
    fields     = resource["form"].from_payload(payload).cleaned_fields()
    references = {
        kwarg: parse_reference(payload.get(key))
        for key, kwarg in resource["references"].items()
    }
    return resource["save"](pk, fields, **references)


# ════════════════════════════════════════════════════════════
# LIST / CREATE
# ════════════════════════════════════════════════════════════
@api_view("GET", "POST")
def collection_view(request, collection):
    """
    GET  → all records, optionally filtered by ?temploId= (members, committees)
           and annotated with display names when ?labels=1.
    POST → create, 201 with the stored record.
    """
    if request.method == "POST":
        obj = _save(collection, None, read_json(request))
        return JsonResponse(obj.as_dict(), status=201)

    filters = {}
    temple_id = request.GET.get("temploId")
    if temple_id and collection in ("members", "committees"):
        filters["temple_id"] = temple_id

    rows = [obj.as_dict() for obj in store_for(collection).list(**filters)]
    if request.GET.get("labels") in ("1", "true"):
        NameResolver().annotate(collection, rows)
    return JsonResponse(rows, safe=False)


# ════════════════════════════════════════════════════════════
# DETAIL / REPLACE / DELETE
# ════════════════════════════════════════════════════════════
@api_view("GET", "PUT", "DELETE")
def detail_view(request, collection, pk):
    store = store_for(collection)

    if request.method == "PUT":
        store.get(pk)
        obj = _save(collection, pk, read_json(request))
        return JsonResponse(obj.as_dict())

    if request.method == "DELETE":
        store.delete(pk)
        return HttpResponse(status=204)

    return JsonResponse(store.get(pk).as_dict())


# ════════════════════════════════════════════════════════════
# ASSIGN
# ════════════════════════════════════════════════════════════
@api_view("PUT")
def assign_view(request, collection, pk, target):
    """Body: {"targetId": "<id>"} or {"targetId": null} to unassign."""
    assign, legacy_key = ASSIGNMENTS[(collection, target)]
    payload = read_json(request)
    if "targetId" in payload:
        target_id = payload["targetId"]
    else:
        target_id = payload.get(legacy_key)

    obj = assign(pk, parse_reference(target_id))
    return JsonResponse(obj.as_dict())


# ════════════════════════════════════════════════════════════
# NAME LOOKUPS
# ════════════════════════════════════════════════════════════
@api_view("GET")
def lookup_view(request, collection):
    """?ids=a,b,c → {"a": "Grace Chapel", "b": "Not Found", ...}"""
    ids = [pk.strip() for pk in request.GET.get("ids", "").split(",") if pk.strip()]
    return JsonResponse(NameResolver().resolve_names(collection, ids))
