"""CSV and spreadsheet export of the contact list. Pure formatting, no I/O beyond the target file."""

import csv
import io
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook

from contactbook.domain import Contact

CSV_HEADER = ("Name", "Email", "Phone", "Company", "Category")
SHEET_NAME = "Contacts"
CREATED_AT_COLUMN = "Created At"
CREATED_AT_FORMAT = "%m/%d/%Y"


def _csv_values(contact: Contact) -> tuple[str, ...]:
    return (
        contact.name,
        contact.email,
        contact.phone or "",
        contact.company or "",
        contact.category.value,
    )


def contacts_to_csv(contacts: Iterable[Contact]) -> str:
    """Header row first, every field quoted, comma-separated, no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for contact in contacts:
        writer.writerow(_csv_values(contact))
    return buffer.getvalue().removesuffix("\n")


def contacts_to_rows(contacts: Iterable[Contact]) -> list[dict[str, str]]:
    """Spreadsheet rows: the CSV columns plus a human-formatted creation date."""
    rows = []
    for contact in contacts:
        row = dict(zip(CSV_HEADER, _csv_values(contact)))
        row[CREATED_AT_COLUMN] = contact.created_at.strftime(CREATED_AT_FORMAT)
        rows.append(row)
    return rows


def write_spreadsheet(
    contacts: Iterable[Contact], destination: str | Path | BinaryIO
) -> None:
    """Write an .xlsx workbook with a single "Contacts" sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_NAME
    columns = (*CSV_HEADER, CREATED_AT_COLUMN)
    sheet.append(columns)
    for row in contacts_to_rows(contacts):
        sheet.append([row[column] for column in columns])
    workbook.save(destination)
