from __future__ import annotations

import os
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from wechat_shop.catalog import entry_for_option
from wechat_shop.config import settings
from wechat_shop.models import OrderReceipt
from wechat_shop.utils.formatters import money


def generate_receipt_pdf(receipt: OrderReceipt, export_dir: Optional[str] = None) -> str:
    out_dir = export_dir or settings.export_dir
    os.makedirs(out_dir, exist_ok=True)

    filename = f"receipt_{receipt.order_id}.pdf"
    path = os.path.join(out_dir, filename)

    c = canvas.Canvas(path, pagesize=A4)
    w, h = A4

    y = h - 50
    c.setFont("Helvetica-Bold", 14)
    c.drawString(40, y, f"ORDER {receipt.order_id}")
    y -= 20

    c.setFont("Helvetica", 11)
    c.drawString(40, y, f"Customer: {receipt.user_id}")
    y -= 16
    c.drawString(40, y, f"Date: {receipt.created_at}")
    y -= 16
    c.drawString(40, y, "Payment: pending")
    y -= 24

    # header
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "Item")
    c.drawString(310, y, "Qty")
    c.drawString(360, y, "Price")
    c.drawString(440, y, "Total")
    y -= 10
    c.line(40, y, 550, y)
    y -= 16

    c.setFont("Helvetica", 10)
    for it in receipt.lines:
        entry = entry_for_option(it.option_id)
        item_name = f"{entry.name} - {it.title}" if entry else it.title
        c.drawString(40, y, item_name[:45])
        c.drawRightString(340, y, str(it.qty))
        c.drawRightString(420, y, money(it.unit_price))
        c.drawRightString(550, y, money(it.line_total))
        y -= 14
        if y < 80:
            c.showPage()
            y = h - 50
            c.setFont("Helvetica", 10)

    y -= 10
    c.line(40, y, 550, y)
    y -= 18
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(550, y, f"TOTAL: {money(receipt.total)}")

    c.save()
    return path
