"""
Splits Module

This module defines the records held by the split ledger.

Features:
    - Fixed-shape calculation and settlement-intent payloads
    - Settlement records with pending/completed status
    - Split records with snapshots of members, expenses and old balances
    - Derived split status (completed iff every settlement is completed)

Data Model:
    Calculations (supplied by the computation collaborator):
        - total_expenses: float
        - total_members: int
        - per_person_share: float

    SettlementIntent (supplied by the computation collaborator):
        - from_participant: participant identifier (who pays)
        - to_participant: participant identifier (who receives)
        - amount: float

    Settlement:
        - id: int (unique for the process lifetime)
        - from_participant, to_participant, amount: copied from the intent
        - status: "pending" or "completed"
        - completed_date: ISO timestamp or None
        - completed_by: string or None

    Split:
        - id: int (assigned by the ledger)
        - timestamp: ISO timestamp of creation
        - date, time: en-IN formatted creation date/time
        - members, expenses, old_balances: snapshots
        - calculations: Calculations
        - settlements: list of Settlement
        - status: "active" or "completed"
        - completed_date: ISO timestamp or None
"""

from typing import Optional, Union

from pydantic import BaseModel


SETTLEMENT_PENDING = "pending"
SETTLEMENT_COMPLETED = "completed"

SPLIT_ACTIVE = "active"
SPLIT_COMPLETED = "completed"


class Calculations(BaseModel):
    """Totals computed for a split by the computation collaborator."""
    total_expenses: float
    total_members: int
    per_person_share: float


class SettlementIntent(BaseModel):
    """One payment instruction produced by the computation collaborator."""
    from_participant: Union[str, int]
    to_participant: Union[str, int]
    amount: float


class Settlement:
    """
    Represents one directional payment obligation within a split.

    Attributes:
        id (int): Unique settlement identifier.
        from_participant (str | int): Participant who pays.
        to_participant (str | int): Participant who receives.
        amount (float): Amount to be paid.
        status (str): "pending" or "completed".
        completed_date (str | None): ISO timestamp of completion.
        completed_by (str | None): Actor who marked the settlement completed.
    """

    def __init__(
        self,
        id: int,
        from_participant: Union[str, int],
        to_participant: Union[str, int],
        amount: float,
        status: str = SETTLEMENT_PENDING,
        completed_date: Optional[str] = None,
        completed_by: Optional[str] = None
    ):
        self.id = id
        self.from_participant = from_participant
        self.to_participant = to_participant
        self.amount = amount
        self.status = status
        self.completed_date = completed_date
        self.completed_by = completed_by

    @classmethod
    def from_intent(cls, settlement_id: int, intent: SettlementIntent) -> "Settlement":
        """Create a pending settlement from a settlement intent."""
        return cls(
            id=settlement_id,
            from_participant=intent.from_participant,
            to_participant=intent.to_participant,
            amount=intent.amount
        )

    @property
    def is_completed(self) -> bool:
        return self.status == SETTLEMENT_COMPLETED

    def mark_completed(self, when: str, completed_by: str) -> None:
        self.status = SETTLEMENT_COMPLETED
        self.completed_date = when
        self.completed_by = completed_by

    def mark_pending(self) -> None:
        self.status = SETTLEMENT_PENDING
        self.completed_date = None
        self.completed_by = None

    def to_dict(self) -> dict:
        """Convert settlement to dictionary for rendering."""
        return {
            "id": self.id,
            "from_participant": self.from_participant,
            "to_participant": self.to_participant,
            "amount": self.amount,
            "status": self.status,
            "completed_date": self.completed_date,
            "completed_by": self.completed_by
        }

    def __repr__(self) -> str:
        return (
            f"Settlement(id={self.id}, from='{self.from_participant}', "
            f"to='{self.to_participant}', amount={self.amount}, status='{self.status}')"
        )


class Split:
    """
    Represents one expense-splitting event.

    Attributes:
        id (int): Ledger-assigned identifier.
        timestamp (str): ISO timestamp of creation.
        date (str): en-IN formatted creation date.
        time (str): en-IN formatted creation time.
        members (list): Snapshot of participant identifiers.
        expenses (list): Snapshot of expense records.
        old_balances (list): Snapshot of prior balances.
        calculations (Calculations): Totals supplied by the caller.
        settlements (list[Settlement]): Payment obligations.
        status (str): "active" or "completed".
        completed_date (str | None): ISO timestamp of completion.
    """

    def __init__(
        self,
        id: int,
        timestamp: str,
        date: str,
        time: str,
        members: list,
        expenses: list,
        old_balances: list,
        calculations: Calculations,
        settlements: list[Settlement],
        status: str = SPLIT_ACTIVE,
        completed_date: Optional[str] = None
    ):
        self.id = id
        self.timestamp = timestamp
        self.date = date
        self.time = time
        self.members = members
        self.expenses = expenses
        self.old_balances = old_balances
        self.calculations = calculations
        self.settlements = settlements
        self.status = status
        self.completed_date = completed_date

    @property
    def is_completed(self) -> bool:
        return self.status == SPLIT_COMPLETED

    def find_settlement(self, settlement_id) -> Optional[Settlement]:
        """Return the settlement with a matching ID, or None."""
        for settlement in self.settlements:
            if settlement.id == settlement_id:
                return settlement
        return None

    def all_settled(self) -> bool:
        return all(s.is_completed for s in self.settlements)

    def completed_settlement_count(self) -> int:
        return sum(1 for s in self.settlements if s.is_completed)

    def to_dict(self) -> dict:
        """Convert split to dictionary for rendering."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "date": self.date,
            "time": self.time,
            "members": list(self.members),
            "expenses": list(self.expenses),
            "old_balances": list(self.old_balances),
            "calculations": self.calculations.model_dump(),
            "settlements": [s.to_dict() for s in self.settlements],
            "status": self.status,
            "completed_date": self.completed_date
        }

    def __repr__(self) -> str:
        return (
            f"Split(id={self.id}, members={len(self.members)}, "
            f"settlements={len(self.settlements)}, status='{self.status}')"
        )
