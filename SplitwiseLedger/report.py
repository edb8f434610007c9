"""
Report Module

Renders a ledger for people: an HTML page and a PDF built from it with
xhtml2pdf. Includes split history, settlement status and statistics.

Functions:
    render_html: Build the HTML report for a ledger.
    export_pdf: Convert the HTML report to PDF bytes.
"""

import io
import logging
from html import escape

from xhtml2pdf import pisa

from analytics import member_settlement_summary
from utils import format_currency


logger = logging.getLogger(__name__)


def _settlement_rows(split, symbol: str) -> str:
    rows = []
    for s in split.settlements:
        done = f"{escape(str(s.completed_by))} on {escape(str(s.completed_date))}" if s.is_completed else "-"
        rows.append(
            f"<tr><td>{escape(str(s.from_participant))}</td>"
            f"<td>{escape(str(s.to_participant))}</td>"
            f"<td>{format_currency(s.amount, symbol)}</td>"
            f"<td>{s.status}</td><td>{done}</td></tr>"
        )
    return "".join(rows) or '<tr><td colspan="5">No settlements needed</td></tr>'


def _split_section(split, symbol: str) -> str:
    calcs = split.calculations
    return f"""
        <h2>Split #{split.id} ({split.status})</h2>
        <p><strong>Recorded:</strong> {split.date} {split.time}</p>
        <p><strong>Members:</strong> {escape(', '.join(str(m) for m in split.members))}</p>
        <p><strong>Total:</strong> {format_currency(calcs.total_expenses, symbol)}
           &nbsp; <strong>Per person:</strong> {format_currency(calcs.per_person_share, symbol)}</p>
        <table>
            <tr><th>From</th><th>To</th><th>Amount</th><th>Status</th><th>Completed</th></tr>
            {_settlement_rows(split, symbol)}
        </table>
    """


def render_html(ledger) -> str:
    """
    Build the HTML report for a ledger.

    Args:
        ledger: Ledger to render (read through its public operations).

    Returns:
        str: Complete HTML document.
    """
    symbol = ledger.settings.CURRENCY_SYMBOL
    splits = ledger.get_all_splits()
    stats = ledger.get_statistics()
    members = member_settlement_summary(splits)

    outstanding = "".join(
        f"<tr><td>{escape(str(name))}</td><td>{format_currency(v['to_pay'], symbol)}</td>"
        f"<td>{format_currency(v['to_receive'], symbol)}</td></tr>"
        for name, v in members.items()
    ) or '<tr><td colspan="3">Everything is settled</td></tr>'

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <style>
            body {{ font-family: Arial, sans-serif; padding: 20px; color: #333; }}
            h1 {{ color: #667eea; border-bottom: 2px solid #667eea; padding-bottom: 10px; }}
            h2 {{ color: #444; margin-top: 25px; }}
            table {{ width: 100%; border-collapse: collapse; margin: 15px 0; }}
            th, td {{ border: 1px solid #ddd; padding: 10px; text-align: left; }}
            th {{ background: #667eea; color: white; }}
            .footer {{ margin-top: 30px; text-align: center; color: #888; font-size: 12px; }}
        </style>
    </head>
    <body>
        <h1>{escape(ledger.metadata.app_name)}</h1>
        <p><strong>Last updated:</strong> {ledger.metadata.last_updated}</p>

        <h2>Statistics</h2>
        <table>
            <tr><th>Splits</th><th>Completed</th><th>Pending</th><th>Total Amount</th>
                <th>Settlements</th><th>Completed</th><th>Pending</th></tr>
            <tr><td>{stats['total_splits']}</td><td>{stats['completed_splits']}</td>
                <td>{stats['pending_splits']}</td><td>{format_currency(stats['total_amount'], symbol)}</td>
                <td>{stats['total_settlements']}</td><td>{stats['completed_settlements']}</td>
                <td>{stats['pending_settlements']}</td></tr>
        </table>

        <h2>Outstanding</h2>
        <table>
            <tr><th>Member</th><th>To Pay</th><th>To Receive</th></tr>
            {outstanding}
        </table>

        {''.join(_split_section(split, symbol) for split in splits) or '<p>No splits recorded</p>'}

        <div class="footer">
            <p>Generated by {escape(ledger.metadata.app_name)} v{escape(ledger.metadata.version)}</p>
        </div>
    </body>
    </html>
    """


def export_pdf(ledger) -> bytes:
    """
    Render the ledger report as a PDF.

    Returns:
        bytes: PDF document.

    Raises:
        RuntimeError: If xhtml2pdf reports a conversion error.
    """
    pdf_buffer = io.BytesIO()
    result = pisa.CreatePDF(io.StringIO(render_html(ledger)), dest=pdf_buffer)
    if result.err:
        raise RuntimeError(f"PDF generation failed with {result.err} error(s)")

    logger.info("exported ledger report (%d splits)", len(ledger))
    return pdf_buffer.getvalue()
