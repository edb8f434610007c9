from datetime import datetime, timedelta, timezone

import pytest

from config import Settings
from ledger import Ledger


class FakeClock:
    """Clock that advances by `step` on every call; `set()` pins the next reading."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def set(self, moment: datetime) -> None:
        self.current = moment

    def __call__(self) -> datetime:
        moment = self.current
        self.current = self.current + self.step
        return moment


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    # 08:35:07 UTC is 14:05:07 in Asia/Kolkata
    return FakeClock(datetime(2026, 3, 5, 8, 35, 7, tzinfo=timezone.utc))


@pytest.fixture
def ledger(settings, clock):
    return Ledger(settings=settings, clock=clock)


def make_calculations(total: float = 300.0, members: int = 3) -> dict:
    return {
        "total_expenses": total,
        "total_members": members,
        "per_person_share": total / members,
    }


def make_intents(*pairs) -> list[dict]:
    return [
        {"from_participant": payer, "to_participant": payee, "amount": amount}
        for payer, payee, amount in pairs
    ]


@pytest.fixture
def save_split(ledger):
    """Save a three-member split with the given settlement intents."""

    def _save(*pairs, total: float = 300.0):
        pairs = pairs or (("Bob", "Asha", 100.0), ("Chitra", "Asha", 100.0))
        return ledger.save_split(
            members=["Asha", "Bob", "Chitra"],
            expenses=[{"payer_id": "Asha", "amount": total, "category": "food"}],
            old_balances=[],
            calculations=make_calculations(total),
            settlements=make_intents(*pairs),
        )

    return _save
