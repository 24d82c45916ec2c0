"""Transfer domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from wealthtrack.database.base import Database
from wealthtrack.domain.entities import Account, AccountType, Transfer
from wealthtrack.domain.errors import (
    AtomicityViolationError,
    NotFoundError,
    ValidationError,
    account_not_found,
    transfer_not_found,
)

logger = logging.getLogger(__name__)


class TransferService:
    """Service for moving money between two accounts."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def _get_transfer_account(self, account_id: int) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.type == AccountType.STOCK:
            raise ValidationError(
                f"Account {account_id} is a stock account; record trades instead of transfers"
            )
        return account

    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        from_amount: Decimal,
        date: date,
        to_amount: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transfer with an outflow on the source and an inflow on the destination.

        Args:
            from_account_id: Source account ID
            to_account_id: Destination account ID
            from_amount: Amount leaving the source, in its currency
            date: Transfer date
            to_amount: Amount arriving, in the destination currency. Defaults to
                ``from_amount`` when both accounts share a currency and is
                required otherwise
            notes: Optional notes, copied onto both ledger entries

        Returns:
            Transfer ID

        Raises:
            NotFoundError: If either account does not exist
            ValidationError: On identical or stock accounts, non-positive
                amounts, or a missing ``to_amount`` across currencies
            AtomicityViolationError: If both ledger entries could not be written
        """
        if from_account_id == to_account_id:
            raise ValidationError("Cannot transfer to the same account")

        source = self._get_transfer_account(from_account_id)
        destination = self._get_transfer_account(to_account_id)

        if from_amount <= 0:
            raise ValidationError("Transfer amount must be positive")
        if to_amount is None:
            if source.currency != destination.currency:
                raise ValidationError(
                    f"Transfer from {source.currency} to {destination.currency} "
                    "requires the received amount"
                )
            to_amount = from_amount
        elif to_amount <= 0:
            raise ValidationError("Received amount must be positive")

        transfer_id = self.db.create_transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            from_amount=from_amount,
            to_amount=to_amount,
            date=date,
            notes=notes,
        )

        entries = self.db.list_transfer_entries(transfer_id)
        if len(entries) != 2:
            self.db.delete_transfer(transfer_id)
            raise AtomicityViolationError(
                f"Transfer {transfer_id} has {len(entries)} ledger entries instead of 2"
            )

        logger.info(
            "Transfer %s: %s %s from account %s to %s %s in account %s",
            transfer_id,
            from_amount,
            source.currency,
            from_account_id,
            to_amount,
            destination.currency,
            to_account_id,
        )
        return transfer_id

    def delete_transfer(self, transfer_id: int) -> None:
        """Delete a transfer together with both of its ledger entries.

        Raises:
            NotFoundError: If the transfer does not exist
            AtomicityViolationError: If the removal could not be committed
        """
        if self.db.get_transfer(transfer_id) is None:
            raise NotFoundError(transfer_not_found(transfer_id))
        self.db.delete_transfer(transfer_id)
        logger.info("Deleted transfer %s", transfer_id)

    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        return self.db.get_transfer(transfer_id)

    def list_transfers(self) -> list[Transfer]:
        return self.db.list_transfers()
