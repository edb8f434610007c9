"""
Analytics Module

This module provides the read-only aggregations over recorded splits.

Features:
    - Split and settlement completion counts
    - Total amount recorded across all splits
    - Per-participant pending amounts to pay / to receive

Data Model:
    Input - splits: list of Split records (see splits.py)

    Output - statistics dict:
        - total_splits: int
        - completed_splits: int
        - pending_splits: int
        - total_amount: float
        - total_settlements: int
        - completed_settlements: int
        - pending_settlements: int

Functions:
    compute_statistics: Aggregate counts and totals over splits.
    member_settlement_summary: Pending amounts per participant.
"""

from collections import defaultdict
from decimal import Decimal

from utils import round_amount


def compute_statistics(splits: list) -> dict:
    """
    Compute aggregate statistics over splits.

    Args:
        splits: List of Split records.

    Returns:
        dict: Counts of splits and settlements by status, plus total_amount
              (sum of calculations.total_expenses).

    Notes:
        - pending_splits = total_splits - completed_splits
        - pending_settlements = total_settlements - completed_settlements
        - Does NOT modify the splits
    """
    total_splits = len(splits)
    completed_splits = sum(1 for split in splits if split.is_completed)

    total_amount = sum(split.calculations.total_expenses for split in splits)

    total_settlements = sum(len(split.settlements) for split in splits)
    completed_settlements = sum(split.completed_settlement_count() for split in splits)

    return {
        "total_splits": total_splits,
        "completed_splits": completed_splits,
        "pending_splits": total_splits - completed_splits,
        "total_amount": total_amount,
        "total_settlements": total_settlements,
        "completed_settlements": completed_settlements,
        "pending_settlements": total_settlements - completed_settlements
    }


def member_settlement_summary(splits: list) -> dict:
    """
    Summarize pending settlements per participant.

    Args:
        splits: List of Split records.

    Returns:
        dict: Keyed by participant identifier, each containing:
            - to_pay: float (pending amounts this participant owes)
            - to_receive: float (pending amounts owed to this participant)
    """
    to_pay = defaultdict(Decimal)
    to_receive = defaultdict(Decimal)

    for split in splits:
        for settlement in split.settlements:
            if settlement.is_completed:
                continue
            amount = Decimal(str(settlement.amount))
            to_pay[settlement.from_participant] += amount
            to_receive[settlement.to_participant] += amount

    participants = sorted(set(to_pay) | set(to_receive), key=str)
    return {
        participant: {
            "to_pay": round_amount(to_pay[participant]),
            "to_receive": round_amount(to_receive[participant])
        }
        for participant in participants
    }
