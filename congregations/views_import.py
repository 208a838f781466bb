# congregations/views_import.py
"""
Bulk import of members from an Excel workbook.

- Upload .xlsx (multipart field ``file``)
- Every row validated with MemberForm
- Temple resolved by name
- All-or-nothing: one bad row aborts the whole import
"""
import logging
import zipfile

import openpyxl
from django.db import transaction
from django.http import HttpResponse, JsonResponse
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from . import assignments
from .exceptions import ValidationConflict
from .forms import MemberForm
from .models import Temple
from .views import api_view

logger = logging.getLogger(__name__)

# Column order of the import sheet (row 1 is the header)
COLUMNS = [
    "firstNames", "lastNames", "email", "phone", "birthDate",
    "status", "temple", "baptismDate", "active",
]

TRUTHY = {"YES", "Y", "TRUE", "1", "SI", "SÍ"}


@api_view("POST")
def import_members(request):
    excel_file = request.FILES.get("file")

    if not excel_file:
        raise ValidationConflict("An Excel file is required (field 'file').")
    if not excel_file.name.lower().endswith(".xlsx"):
        raise ValidationConflict("The file must be an .xlsx workbook.")

    try:
        workbook = openpyxl.load_workbook(excel_file, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise ValidationConflict(f"Could not read the Excel file: {exc}")

    parsed = []
    errors = []
    # Skip header row
    for row_num, row in enumerate(workbook.active.iter_rows(min_row=2, values_only=True), start=2):
        if not any(cell not in (None, "") for cell in row):
            continue
        try:
            parsed.append(parse_row(row))
        except ValidationConflict as exc:
            errors.append({"row": row_num, "errors": exc.details.get("errors", exc.message)})
    workbook.close()

    if errors:
        raise ValidationConflict(
            f"Import aborted: {len(errors)} row(s) have errors. Nothing was saved.",
            rows=errors,
        )
    if not parsed:
        raise ValidationConflict("The workbook has no member rows.")

    with transaction.atomic():
        created = [
            assignments.save_member(None, fields, temple_id)
            for fields, temple_id in parsed
        ]

    logger.info(f"Imported {len(created)} member(s) from {excel_file.name}")
    return JsonResponse([member.as_dict() for member in created], safe=False, status=201)


def parse_row(row):
    """
    Turn one sheet row into (member fields, temple id).

    Row structure (0-indexed):
    0: first names
    1: last names
    2: email
    3: phone (optional)
    4: birth date (YYYY-MM-DD or Excel date)
    5: status (SERVER/BAPTIZED/SYMPATHIZER/UNAFFILIATED, default UNAFFILIATED)
    6: temple name (optional)
    7: baptism date (optional)
    8: active (YES/NO, default YES)
    """
    row = tuple(row) + (None,) * (len(COLUMNS) - len(row))
    values = dict(zip(COLUMNS, row))

    payload = {
        "firstNames":  _text(values["firstNames"]),
        "lastNames":   _text(values["lastNames"]),
        "email":       _text(values["email"]),
        "phone":       _text(values["phone"]),
        "birthDate":   values["birthDate"],
        "status":      _text(values["status"]).upper() or "UNAFFILIATED",
        "baptismDate": values["baptismDate"] or None,
        "active":      True,
    }
    if values["active"] not in (None, ""):
        payload["active"] = _text(values["active"]).upper() in TRUTHY

    errors = {}
    temple_id = None
    temple_name = _text(values["temple"])
    if temple_name:
        temple = Temple.objects.filter(name__iexact=temple_name).first()
        if temple is None:
            errors["temple"] = [f"Temple '{temple_name}' does not exist."]
        else:
            temple_id = temple.pk

    form = MemberForm.from_payload(payload)
    if not form.is_valid():
        errors.update(form.wire_errors())
    if errors:
        raise ValidationConflict("Invalid row.", errors=errors)

    return dict(form.cleaned_data), temple_id


@api_view("GET")
def download_template(request):
    """Empty import workbook holding only the styled header row."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Members"

    header_fill = PatternFill(start_color="4F46E5", end_color="4F46E5", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for col_num, header in enumerate(COLUMNS, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.fill = header_fill
        cell.font = header_font

    for column in ws.columns:
        width = max(len(str(cell.value or "")) for cell in column)
        ws.column_dimensions[column[0].column_letter].width = min(width + 2, 50)

    response = HttpResponse(
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    response["Content-Disposition"] = "attachment; filename=member_import_template.xlsx"
    wb.save(response)
    return response


def _text(value):
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()
