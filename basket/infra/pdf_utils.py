import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from basket.logic.archive.browse import archive_detail_view


def generate_pdf_for_entry(entries, entry_id: str) -> bytes:
    """Generate a one-page PDF for an archived trip: info block plus the list snapshot."""
    view = archive_detail_view(entries, entry_id)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Einkauf – {view['store']}", styles["Title"]),
        Paragraph(view["date"], styles["Normal"]),
        Paragraph(f"Betrag: {view['amount_text']}", styles["Normal"]),
        Spacer(1, 16),
    ]

    # ✓/○ are missing from the core PDF fonts
    data = [["", "Artikel", "Menge"]]
    for item in view["items"]:
        data.append(["x" if item["checked"] else "-", item["name"], item["amount"]])

    table = Table(data, repeatRows=1, colWidths=[30, 300, 150])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (0,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
