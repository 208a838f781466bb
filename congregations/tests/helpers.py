"""Record builders shared by the congregations tests."""
import datetime

from congregations.models import Member, Pastor
from congregations.store import committees, members, pastors, temples


def make_temple(name="Grace Chapel", **extra):
    fields = dict(
        name=name,
        address="Calle 10 # 4-21",
        city="Bogotá",
        region="Cundinamarca",
        country="Colombia",
        founding_date=datetime.date(1985, 3, 17),
    )
    fields.update(extra)
    return temples.create(**fields)


def make_pastor(first_name="Ana", last_name="Ruiz", **extra):
    fields = dict(
        first_name=first_name,
        last_name=last_name,
        phone="+573001112233",
        email=f"{first_name.lower()}.{last_name.lower()}@example.com",
        birth_date=datetime.date(1975, 6, 2),
        ordination_date=datetime.date(2001, 9, 9),
        ministerial_license=f"LIC-{first_name[:1]}{last_name[:1]}-001",
        status=Pastor.Status.ACTIVE,
    )
    fields.update(extra)
    return pastors.create(**fields)


def make_member(first_names="Luis", last_names="Gomez", **extra):
    fields = dict(
        first_names=first_names,
        last_names=last_names,
        email=f"{first_names.lower()}.{last_names.lower()}@example.com",
        birth_date=datetime.date(1992, 11, 30),
        status=Member.Status.BAPTIZED,
    )
    fields.update(extra)
    return members.create(**fields)


def make_committee(name="Youth", **extra):
    fields = dict(name=name, description="Youth ministry")
    fields.update(extra)
    return committees.create(**fields)
