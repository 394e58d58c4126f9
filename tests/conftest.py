import io

import openpyxl
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

PDF_PASSWORD = "s3cret"
ENCRYPTED_PDF_TEXT = "Confidential budget: 1200 EUR"


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a single-page PDF that needs PDF_PASSWORD to open."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt=PDF_PASSWORD)
    c.drawString(72, 720, ENCRYPTED_PDF_TEXT)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def two_sheet_workbook_bytes() -> bytes:
    """Generate an .xlsx workbook with Sheet1 and Sheet2."""
    wb = openpyxl.Workbook()
    first = wb.active
    first.title = "Sheet1"
    first.append(["item", "amount"])
    first.append(["rent", 1200])
    first.append(["insurance", 85.5])
    second = wb.create_sheet("Sheet2")
    second.append(["risk", "owner"])
    second.append(["late delivery", "ops, logistics"])
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
