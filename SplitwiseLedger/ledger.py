"""
Ledger Module

This module holds the in-memory store of split calculations and their
settlement history.

Features:
    - Save a split with snapshots of members, expenses and old balances
    - List splits newest first, look up and delete by ID
    - Mark settlements completed / pending, keeping split status in sync
    - Aggregate statistics
    - Reset to an empty ledger

Data Model:
    LedgerMetadata:
        - app_name: string
        - version: string
        - created: ISO timestamp
        - last_updated: ISO timestamp (refreshed on every mutation)

    Ledger state:
        - metadata: LedgerMetadata
        - splits: list of Split (insertion order)
        - next_id: int (starts at 1, never reused until reset)

Notes:
    - Lookup failures return None / False instead of raising
    - All operations are synchronous; a single lock serializes access
"""

import copy
import logging
from threading import Lock
from typing import Callable, Optional

from analytics import compute_statistics
from config import Settings, get_settings
from splits import (
    Calculations,
    Settlement,
    SettlementIntent,
    Split,
    SPLIT_ACTIVE,
    SPLIT_COMPLETED,
)
from utils import (
    coerce_settlement_id,
    format_date_in,
    format_time_in,
    next_settlement_id,
    parse_iso,
    to_iso,
    utc_now,
)


logger = logging.getLogger(__name__)


class LedgerMetadata:
    """
    Descriptive metadata for a ledger.

    Attributes:
        app_name (str): Name of the application owning the ledger.
        version (str): Schema version of the ledger layout.
        created (str): ISO timestamp of ledger creation (or last reset).
        last_updated (str): ISO timestamp of the latest mutation.
    """

    def __init__(self, app_name: str, version: str, created: str, last_updated: str):
        self.app_name = app_name
        self.version = version
        self.created = created
        self.last_updated = last_updated

    def to_dict(self) -> dict:
        return {
            "app_name": self.app_name,
            "version": self.version,
            "created": self.created,
            "last_updated": self.last_updated
        }

    def __repr__(self) -> str:
        return f"LedgerMetadata(app='{self.app_name}', version='{self.version}', updated='{self.last_updated}')"


class Ledger:
    """
    In-memory record store for splits.

    A ledger is constructed explicitly and handed to whatever hosts it; there
    is no module-level instance.

    Args:
        settings: Settings to use (defaults to get_settings()).
        clock: Zero-argument callable returning the current aware datetime.
    """

    def __init__(self, settings: Settings = None, clock: Callable = None):
        self.settings = settings or get_settings()
        self._clock = clock or utc_now
        self._lock = Lock()
        self._init_state()

    def _init_state(self) -> None:
        now = self._now_iso()
        self.metadata = LedgerMetadata(
            app_name=self.settings.APP_NAME,
            version=self.settings.SCHEMA_VERSION,
            created=now,
            last_updated=now
        )
        self.splits: list[Split] = []
        self.next_id = 1

    def _now_iso(self) -> str:
        return to_iso(self._clock())

    def _touch(self) -> None:
        self.metadata.last_updated = self._now_iso()

    def _find_split(self, split_id) -> Optional[Split]:
        """Internal lookup - assumes lock is already held."""
        for split in self.splits:
            if split.id == split_id:
                return split
        return None

    def _find_settlement(self, split_id, settlement_id) -> tuple:
        """Internal lookup - assumes lock is already held."""
        split = self._find_split(split_id)
        if split is None:
            logger.debug("split %s not found", split_id)
            return None, None

        settlement = split.find_settlement(coerce_settlement_id(settlement_id))
        if settlement is None:
            logger.debug("settlement %r not found in split %s", settlement_id, split_id)
        return split, settlement

    # ------------------ CREATE ------------------

    def save_split(
        self,
        members: list,
        expenses: list,
        old_balances: list,
        calculations,
        settlements: list
    ) -> Split:
        """
        Save a new split calculation.

        Args:
            members: Participant identifiers (copied).
            expenses: Expense records (copied).
            old_balances: Prior balances (copied).
            calculations: Calculations instance or dict with total_expenses,
                total_members and per_person_share.
            settlements: SettlementIntent instances or dicts with
                from_participant, to_participant and amount.

        Returns:
            Split: The newly stored split (status "active", all settlements
                "pending").

        Raises:
            pydantic.ValidationError: If calculations or a settlement intent
                is missing a field. Nothing is stored in that case.

        Notes:
            - Amounts are not range-checked (negative values are stored as-is)
        """
        calcs = Calculations.model_validate(calculations)
        intents = [SettlementIntent.model_validate(s) for s in settlements]

        with self._lock:
            moment = self._clock()
            split = Split(
                id=self.next_id,
                timestamp=to_iso(moment),
                date=format_date_in(moment, self.settings.DISPLAY_TIMEZONE),
                time=format_time_in(moment, self.settings.DISPLAY_TIMEZONE),
                members=copy.deepcopy(list(members)),
                expenses=copy.deepcopy(list(expenses)),
                old_balances=copy.deepcopy(list(old_balances)),
                calculations=calcs.model_copy(),
                settlements=[Settlement.from_intent(next_settlement_id(), i) for i in intents]
            )

            self.splits.append(split)
            self.next_id += 1
            self._touch()

        logger.info(
            "saved split %s: %d members, %d settlements, total %s",
            split.id, len(split.members), len(split.settlements), calcs.total_expenses
        )
        return split

    # ------------------ READ ------------------

    def get_all_splits(self) -> list[Split]:
        """
        Get all splits, most recent first.

        Ties on timestamp are broken by ID, highest (newest) first.

        Returns:
            list[Split]: New list; the ledger's own order is not changed.
        """
        with self._lock:
            return sorted(
                self.splits,
                key=lambda s: (parse_iso(s.timestamp), s.id),
                reverse=True
            )

    def get_split(self, split_id) -> Optional[Split]:
        """
        Get a split by ID.

        Returns:
            Split | None: The split, or None if no split has that ID.
        """
        with self._lock:
            return self._find_split(split_id)

    # ------------------ SETTLEMENT STATUS ------------------

    def mark_settlement_completed(self, split_id, settlement_id, completed_by: str = None) -> bool:
        """
        Mark a settlement as completed.

        Completing the last pending settlement also completes the split.

        Args:
            split_id: ID of the owning split.
            settlement_id: Settlement ID (number or numeric string).
            completed_by: Actor label (defaults to settings.DEFAULT_COMPLETED_BY).

        Returns:
            bool: True if the settlement was found and updated.
        """
        if completed_by is None:
            completed_by = self.settings.DEFAULT_COMPLETED_BY

        with self._lock:
            split, settlement = self._find_settlement(split_id, settlement_id)
            if settlement is None:
                return False

            now = self._now_iso()
            settlement.mark_completed(now, completed_by)

            if split.all_settled():
                split.status = SPLIT_COMPLETED
                split.completed_date = now
                logger.info("split %s completed", split.id)

            self._touch()

        logger.info("settlement %s in split %s completed by %s", settlement.id, split.id, completed_by)
        return True

    def mark_settlement_pending(self, split_id, settlement_id) -> bool:
        """
        Mark a settlement as pending (undo completion).

        The owning split always becomes active again, whatever the state of
        its other settlements.

        Returns:
            bool: True if the settlement was found and updated.
        """
        with self._lock:
            split, settlement = self._find_settlement(split_id, settlement_id)
            if settlement is None:
                return False

            settlement.mark_pending()

            if split.status != SPLIT_ACTIVE:
                logger.info("split %s reactivated", split.id)
            split.status = SPLIT_ACTIVE
            split.completed_date = None

            self._touch()

        logger.info("settlement %s in split %s reverted to pending", settlement.id, split.id)
        return True

    # ------------------ DELETE / RESET ------------------

    def delete_split(self, split_id) -> bool:
        """
        Delete a split by ID.

        Returns:
            bool: True if a split was removed.
        """
        with self._lock:
            for index, split in enumerate(self.splits):
                if split.id == split_id:
                    del self.splits[index]
                    self._touch()
                    break
            else:
                logger.debug("split %s not found, nothing deleted", split_id)
                return False

        logger.info("deleted split %s", split_id)
        return True

    def clear_all_data(self) -> None:
        """
        Reset the ledger to its empty initial state.

        Metadata timestamps are renewed and next_id returns to 1. Settlement
        IDs keep counting so they stay unique for the process lifetime.
        """
        with self._lock:
            dropped = len(self.splits)
            self._init_state()

        logger.info("ledger cleared (%d splits removed)", dropped)

    # ------------------ STATISTICS ------------------

    def get_statistics(self) -> dict:
        """Aggregate counts and totals over all splits (see analytics.compute_statistics)."""
        with self._lock:
            return compute_statistics(self.splits)

    def to_dict(self) -> dict:
        """Full ledger state for rendering."""
        with self._lock:
            return {
                "metadata": self.metadata.to_dict(),
                "splits": [split.to_dict() for split in self.splits],
                "next_id": self.next_id
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self.splits)

    def __repr__(self) -> str:
        with self._lock:
            return f"Ledger(splits={len(self.splits)}, next_id={self.next_id})"
