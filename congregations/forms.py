import datetime
import re

from django import forms
from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_datetime

from .exceptions import ValidationConflict
from .models import Committee, Member, Pastor, Temple


class IsoDateField(forms.DateField):
    """
    Date field that also accepts full ISO-8601 datetimes
    (``2024-05-01T00:00:00.000Z``) and keeps only the date part.
    """

    def to_python(self, value):
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            try:
                parsed = parse_datetime(value.strip())
            except ValueError:
                parsed = None
            if parsed is None:
                raise ValidationError(self.error_messages["invalid"], code="invalid")
            return parsed.date()
        if value not in self.empty_values and not isinstance(value, (str, datetime.date)):
            raise ValidationError(self.error_messages["invalid"], code="invalid")
        return super().to_python(value)


class StrictBooleanField(forms.BooleanField):
    """
    Boolean that only takes JSON true/false. The checkbox reading of
    BooleanField would turn any non-empty string such as "no" into True.
    """

    def to_python(self, value):
        if value is None or isinstance(value, bool):
            return value
        raise ValidationError("Enter true or false.", code="invalid")

    def validate(self, value):
        pass


class PayloadForm(forms.ModelForm):
    """
    ModelForm fed from a JSON body. ``wire_names`` maps the camelCase keys
    used on the wire to model field names; errors are reported back under
    the wire keys.
    """
    wire_names = {}

    @classmethod
    def from_payload(cls, payload):
        data = {
            field: payload[key]
            for key, field in cls.wire_names.items()
            if key in payload
        }
        return cls(data)

    def wire_errors(self):
        reverse = {field: key for key, field in self.wire_names.items()}
        return {
            reverse.get(field, field): list(errors)
            for field, errors in self.errors.items()
        }

    def cleaned_fields(self):
        if not self.is_valid():
            label = self._meta.model._meta.verbose_name.lower()
            raise ValidationConflict(f"Invalid {label} data.", errors=self.wire_errors())
        return dict(self.cleaned_data)

    def clean_phone(self):
        """Strip spaces and dashes; allow an optional leading + and 7-15 digits."""
        phone = (self.cleaned_data.get("phone") or "").strip()
        if not phone:
            return phone

        phone = re.sub(r"[\s\-]", "", phone)
        if not re.match(r"^\+?\d{7,15}$", phone):
            raise ValidationError("Invalid phone number. Use digits only, optionally starting with +.")
        return phone

    def clean_email(self):
        return (self.cleaned_data.get("email") or "").strip().lower()

    def clean_birth_date(self):
        birth_date = self.cleaned_data.get("birth_date")
        if birth_date and birth_date > datetime.date.today():
            raise ValidationError("Birth date cannot be in the future.")
        return birth_date


class TempleForm(PayloadForm):
    wire_names = {
        "name":         "name",
        "address":      "address",
        "city":         "city",
        "region":       "region",
        "country":      "country",
        "foundingDate": "founding_date",
    }

    class Meta:
        model  = Temple
        fields = ["name", "address", "city", "region", "country", "founding_date"]
        field_classes = {"founding_date": IsoDateField}


class PastorForm(PayloadForm):
    wire_names = {
        "firstName":          "first_name",
        "lastName":           "last_name",
        "phone":              "phone",
        "email":              "email",
        "birthDate":          "birth_date",
        "ordinationDate":     "ordination_date",
        "ministerialLicense": "ministerial_license",
        "status":             "status",
    }

    class Meta:
        model  = Pastor
        fields = [
            "first_name", "last_name", "phone", "email",
            "birth_date", "ordination_date", "ministerial_license", "status",
        ]
        field_classes = {
            "birth_date":      IsoDateField,
            "ordination_date": IsoDateField,
        }


class MemberForm(PayloadForm):
    wire_names = {
        "firstNames":       "first_names",
        "lastNames":        "last_names",
        "email":            "email",
        "phone":            "phone",
        "birthDate":        "birth_date",
        "status":           "status",
        "active":           "active",
        "registrationDate": "registration_date",
        "baptismDate":      "baptism_date",
    }

    class Meta:
        model  = Member
        fields = [
            "first_names", "last_names", "email", "phone", "birth_date",
            "status", "active", "registration_date", "baptism_date",
        ]
        field_classes = {
            "birth_date":        IsoDateField,
            "registration_date": IsoDateField,
            "baptism_date":      IsoDateField,
            "active":            StrictBooleanField,
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["registration_date"].required = False

    def clean_registration_date(self):
        return self.cleaned_data.get("registration_date") or datetime.date.today()

    def clean_active(self):
        # A missing key means a new member is active
        if "active" not in self.data:
            return True
        active = self.cleaned_data.get("active")
        if active is None:
            raise ValidationError("Enter true or false.")
        return active


class CommitteeForm(PayloadForm):
    wire_names = {
        "name":         "name",
        "description":  "description",
        "creationDate": "creation_date",
    }

    class Meta:
        model  = Committee
        fields = ["name", "description", "creation_date"]
        field_classes = {"creation_date": IsoDateField}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["creation_date"].required = False

    def clean_creation_date(self):
        return self.cleaned_data.get("creation_date") or datetime.date.today()
