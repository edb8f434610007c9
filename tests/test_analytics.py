from analytics import compute_statistics, member_settlement_summary


def test_statistics_of_no_splits():
    assert compute_statistics([]) == {
        "total_splits": 0,
        "completed_splits": 0,
        "pending_splits": 0,
        "total_amount": 0,
        "total_settlements": 0,
        "completed_settlements": 0,
        "pending_settlements": 0,
    }


def test_statistics_sum_total_expenses(save_split):
    splits = [save_split(total=120.5), save_split(total=79.5)]
    stats = compute_statistics(splits)
    assert stats["total_amount"] == 200.0
    assert stats["total_settlements"] == 4
    assert stats["pending_settlements"] == 4


def test_member_summary_counts_only_pending(ledger, save_split):
    split = save_split(("Bob", "Asha", 33.333), ("Chitra", "Asha", 10.0), ("Asha", "Dev", 5.0))
    ledger.mark_settlement_completed(split.id, split.settlements[1].id)

    summary = member_settlement_summary([split])

    assert list(summary) == ["Asha", "Bob", "Dev"]
    assert summary["Asha"] == {"to_pay": 5.0, "to_receive": 33.33}
    assert summary["Bob"] == {"to_pay": 33.33, "to_receive": 0.0}
    assert summary["Dev"] == {"to_pay": 0.0, "to_receive": 5.0}


def test_member_summary_empty_when_all_settled(ledger, save_split):
    split = save_split(("Bob", "Asha", 10.0))
    ledger.mark_settlement_completed(split.id, split.settlements[0].id)
    assert member_settlement_summary(ledger.get_all_splits()) == {}


def test_member_summary_with_mixed_identifier_types(ledger):
    split = ledger.save_split(
        [1, "Asha"],
        [],
        [],
        {"total_expenses": 20.0, "total_members": 2, "per_person_share": 10.0},
        [{"from_participant": 1, "to_participant": "Asha", "amount": 10.0}],
    )

    summary = member_settlement_summary([split])

    assert list(summary) == [1, "Asha"]
    assert summary[1] == {"to_pay": 10.0, "to_receive": 0.0}
