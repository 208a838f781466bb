from django.db.models import Count
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from congregations.models import Committee, Member, Pastor, Temple


def _count_by_status(model):
    counts = dict.fromkeys(model.Status.values, 0)
    rows = model.objects.order_by().values("status").annotate(total=Count("pk"))
    for row in rows:
        counts[row["status"]] = row["total"]
    return counts


@require_GET
def dashboard_stats(request):
    """
    Registry statistics in one call.
    """

    # ── Temples ──
    total_temples          = Temple.objects.count()
    temples_without_pastor = Temple.objects.filter(principal_pastor__isnull=True).count()

    # ── Pastors ──
    total_pastors      = Pastor.objects.count()
    unassigned_pastors = Pastor.objects.filter(temple__isnull=True).count()

    # ── Members ──
    active_members   = Member.objects.filter(active=True).count()
    inactive_members = Member.objects.filter(active=False).count()

    # ── Committees ──
    total_committees          = Committee.objects.count()
    committees_without_leader = Committee.objects.filter(leader__isnull=True).count()

    stats = {
        "temples": {
            "total":         total_temples,
            "withoutPastor": temples_without_pastor,
        },
        "pastors": {
            "total":      total_pastors,
            "unassigned": unassigned_pastors,
            "byStatus":   _count_by_status(Pastor),
        },
        "members": {
            "active":   active_members,
            "inactive": inactive_members,
            "byStatus": _count_by_status(Member),
        },
        "committees": {
            "total":         total_committees,
            "withoutLeader": committees_without_leader,
        },
    }

    return JsonResponse(stats)
