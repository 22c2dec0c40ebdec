import io

import pytest
from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen import canvas


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
def english_bill_pdf_bytes() -> bytes:
    """A one-page utility bill with header, amount block and payment footer."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Billed by: ACME Power Ltd")
    c.drawString(72, 700, "Invoice #: INV-2024-001")
    c.drawString(72, 680, "Invoice date: 2024-03-01")
    c.drawString(72, 660, "Account number: 12345678")
    c.drawString(72, 640, "Billing address: 1 Main Street, Springfield")
    c.drawString(72, 500, "Electricity usage 420 kWh")
    c.drawString(72, 480, "Amount due:")
    c.drawString(300, 480, "$1,234.56")
    c.drawString(72, 460, "Due date: March 15, 2024")
    c.drawString(72, 100, "Payment method: Direct Debit")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def hungarian_bill_pdf_bytes() -> bytes:
    """A Hungarian-style bill printed without accents, as some billing systems do."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 780, "MVM Next Energiakereskedelmi Zrt.")
    c.drawString(72, 760, "Szamla sorszama: 123456789012")
    c.drawString(72, 740, "Felhasznalo azonosito: 3000123456")
    c.drawString(72, 500, "Fizetendo osszeg:")
    c.drawString(300, 500, "12 345 Ft")
    c.drawString(72, 480, "Fizetesi hatarido")
    c.drawString(72, 460, "2024.03.15.")
    c.drawString(72, 100, "Fizetesi mod: Csoportos beszedes")
    c.save()
    return buf.getvalue()
