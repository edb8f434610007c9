from report import export_pdf, render_html


def test_render_html_lists_splits_and_statistics(ledger, save_split):
    split = save_split(("Bob", "Asha", 100.0), ("Chitra", "Asha", 100.0))
    ledger.mark_settlement_completed(split.id, split.settlements[0].id, completed_by="Bob")

    html = render_html(ledger)

    assert "Splitwise Calculator Database" in html
    assert f"Split #{split.id} (active)" in html
    assert "₹300.00" in html
    assert "Asha, Bob, Chitra" in html
    assert "completed" in html and "pending" in html
    # only Chitra's payment is outstanding
    assert "<td>Chitra</td><td>₹100.00</td>" in html


def test_render_html_escapes_member_names(ledger):
    ledger.save_split(
        ["<b>Asha</b>"],
        [],
        [],
        {"total_expenses": 0, "total_members": 1, "per_person_share": 0},
        [],
    )
    html = render_html(ledger)
    assert "&lt;b&gt;Asha&lt;/b&gt;" in html
    assert "<b>Asha</b>" not in html


def test_render_empty_ledger(ledger):
    html = render_html(ledger)
    assert "No splits recorded" in html
    assert "Everything is settled" in html


def test_export_pdf(ledger, save_split):
    save_split()
    pdf = export_pdf(ledger)
    assert pdf.startswith(b"%PDF")
