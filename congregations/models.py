import datetime
import uuid

from django.core.exceptions import ValidationError
from django.db import models


def new_id():
    """Opaque identifier assigned to every record at creation."""
    return uuid.uuid4().hex


# ──────────────────────────────────────────
# TEMPLE
# ──────────────────────────────────────────
class Temple(models.Model):
    id               = models.CharField(primary_key=True, max_length=32, default=new_id, editable=False)
    name             = models.CharField(max_length=200, verbose_name="Name")
    address          = models.CharField(max_length=255, verbose_name="Address")
    city             = models.CharField(max_length=100, verbose_name="City")
    region           = models.CharField(max_length=100, verbose_name="Region")
    country          = models.CharField(max_length=100, verbose_name="Country")
    founding_date    = models.DateField(verbose_name="Founding date")
    principal_pastor = models.OneToOneField(
        "Pastor", on_delete=models.PROTECT,
        null=True, blank=True,
        related_name="led_temple",
        verbose_name="Principal pastor"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Temple"
        verbose_name_plural = "Temples"
        ordering            = ["name"]

    def __str__(self):
        return self.name

    @property
    def display_name(self):
        return self.name

    def as_dict(self):
        return {
            "id":                self.pk,
            "name":              self.name,
            "address":           self.address,
            "city":              self.city,
            "region":            self.region,
            "country":           self.country,
            "foundingDate":      self.founding_date,
            "pastorPrincipalId": self.principal_pastor_id,
            "createdAt":         self.created_at,
            "updatedAt":         self.updated_at,
        }


# ──────────────────────────────────────────
# PASTOR
# ──────────────────────────────────────────
class Pastor(models.Model):

    class Status(models.TextChoices):
        ACTIVE     = "ACTIVE",     "Active"
        RETIRED    = "RETIRED",    "Retired"
        SANCTIONED = "SANCTIONED", "Sanctioned"
        IN_PROCESS = "IN_PROCESS", "In process"

    id                  = models.CharField(primary_key=True, max_length=32, default=new_id, editable=False)
    first_name          = models.CharField(max_length=100, verbose_name="First name")
    last_name           = models.CharField(max_length=100, verbose_name="Last name")
    phone               = models.CharField(max_length=20, verbose_name="Phone")
    email               = models.EmailField(verbose_name="Email")
    birth_date          = models.DateField(verbose_name="Birth date")
    ordination_date     = models.DateField(verbose_name="Ordination date")
    ministerial_license = models.CharField(max_length=50, verbose_name="Ministerial license")
    status              = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        verbose_name="Status"
    )
    # Inverse side of Temple.principal_pastor, kept in step by congregations.assignments
    temple              = models.OneToOneField(
        Temple, on_delete=models.PROTECT,
        null=True, blank=True,
        related_name="assigned_pastor",
        verbose_name="Temple"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Pastor"
        verbose_name_plural = "Pastors"
        ordering            = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["status"], name="pastor_status_idx"),
        ]

    def __str__(self):
        return self.display_name

    def clean(self):
        if self.birth_date and self.ordination_date:
            if self.ordination_date < self.birth_date:
                raise ValidationError({
                    "ordination_date": "Ordination date cannot be before the birth date."
                })

    @property
    def display_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def as_dict(self):
        return {
            "id":                 self.pk,
            "firstName":          self.first_name,
            "lastName":           self.last_name,
            "phone":              self.phone,
            "email":              self.email,
            "birthDate":          self.birth_date,
            "ordinationDate":     self.ordination_date,
            "ministerialLicense": self.ministerial_license,
            "status":             self.status,
            "temploId":           self.temple_id,
            "createdAt":          self.created_at,
            "updatedAt":          self.updated_at,
        }


# ──────────────────────────────────────────
# MEMBER
# ──────────────────────────────────────────
class Member(models.Model):

    class Status(models.TextChoices):
        SERVER       = "SERVER",       "Server"
        BAPTIZED     = "BAPTIZED",     "Baptized"
        SYMPATHIZER  = "SYMPATHIZER",  "Sympathizer"
        UNAFFILIATED = "UNAFFILIATED", "Unaffiliated"

    id                = models.CharField(primary_key=True, max_length=32, default=new_id, editable=False)
    first_names       = models.CharField(max_length=150, verbose_name="First names")
    last_names        = models.CharField(max_length=150, verbose_name="Last names")
    email             = models.EmailField(verbose_name="Email")
    phone             = models.CharField(max_length=20, blank=True, verbose_name="Phone")
    birth_date        = models.DateField(verbose_name="Birth date")
    status            = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.UNAFFILIATED,
        verbose_name="Status"
    )
    temple            = models.ForeignKey(
        Temple, on_delete=models.PROTECT,
        null=True, blank=True,
        related_name="members",
        verbose_name="Temple"
    )
    active            = models.BooleanField(default=True, verbose_name="Active")
    registration_date = models.DateField(default=datetime.date.today, verbose_name="Registration date")
    baptism_date      = models.DateField(blank=True, null=True, verbose_name="Baptism date")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Member"
        verbose_name_plural = "Members"
        ordering            = ["last_names", "first_names"]
        indexes = [
            models.Index(fields=["status"], name="member_status_idx"),
            models.Index(fields=["active"], name="member_active_idx"),
        ]

    def __str__(self):
        return self.display_name

    def clean(self):
        if self.baptism_date and self.birth_date:
            if self.baptism_date < self.birth_date:
                raise ValidationError({
                    "baptism_date": "Baptism date cannot be before the birth date."
                })

    @property
    def display_name(self):
        return f"{self.first_names} {self.last_names}".strip()

    def as_dict(self):
        return {
            "id":               self.pk,
            "firstNames":       self.first_names,
            "lastNames":        self.last_names,
            "email":            self.email,
            "phone":            self.phone,
            "birthDate":        self.birth_date,
            "status":           self.status,
            "temploId":         self.temple_id,
            "active":           self.active,
            "registrationDate": self.registration_date,
            "baptismDate":      self.baptism_date,
            "createdAt":        self.created_at,
            "updatedAt":        self.updated_at,
        }


# ──────────────────────────────────────────
# COMMITTEE
# ──────────────────────────────────────────
class Committee(models.Model):
    id            = models.CharField(primary_key=True, max_length=32, default=new_id, editable=False)
    name          = models.CharField(max_length=200, verbose_name="Name")
    description   = models.TextField(blank=True, verbose_name="Description")
    creation_date = models.DateField(default=datetime.date.today, verbose_name="Creation date")
    temple        = models.ForeignKey(
        Temple, on_delete=models.PROTECT,
        null=True, blank=True,
        related_name="committees",
        verbose_name="Temple"
    )
    leader        = models.ForeignKey(
        Member, on_delete=models.PROTECT,
        null=True, blank=True,
        related_name="led_committees",
        verbose_name="Leader"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Committee"
        verbose_name_plural = "Committees"
        ordering            = ["name"]

    def __str__(self):
        return self.name

    @property
    def display_name(self):
        return self.name

    def as_dict(self):
        return {
            "id":           self.pk,
            "name":         self.name,
            "description":  self.description,
            "creationDate": self.creation_date,
            "temploId":     self.temple_id,
            "liderId":      self.leader_id,
            "createdAt":    self.created_at,
            "updatedAt":    self.updated_at,
        }
