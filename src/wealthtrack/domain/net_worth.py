"""Net worth aggregation across all accounts."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from wealthtrack.database.base import Database
from wealthtrack.domain.balance import calculate_balance, calculate_credit_owed, group_entries_by_account
from wealthtrack.domain.cost_basis import PortfolioService, cost_basis_by_account
from wealthtrack.domain.currency import RateTable, convert_currency, round_currency
from wealthtrack.domain.entities import (
    Account,
    AccountType,
    HoldingState,
    LedgerEntry,
    NetWorthContribution,
    NetWorthSummary,
    TypeTotal,
)
from wealthtrack.domain.errors import InvalidAccountTypeError
from wealthtrack.domain.settings import SettingsService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def account_contribution(
    account: Account,
    entries: Sequence[LedgerEntry],
    cost_basis: Decimal,
    main_currency: str,
    rate_table: RateTable,
) -> NetWorthContribution:
    """Value one account in the main currency and sign it for net worth.

    Bank and cash accounts count their balance, stock accounts their cost
    basis, asset accounts their stored value. Loans subtract their balance and
    credit cards subtract the owed part of their limit.

    Raises:
        InvalidAccountTypeError: If the account type is outside the closed set
        UnknownCurrencyError: If the account currency has no rate
    """
    try:
        account_type = AccountType(account.type)
    except ValueError:
        raise InvalidAccountTypeError(account.type) from None

    balance = calculate_balance(account.initial_balance, entries)

    def to_main(amount: Decimal) -> Decimal:
        return convert_currency(amount, account.currency, main_currency, rate_table)

    if account_type in (AccountType.BANK, AccountType.CASH):
        value = round_currency(to_main(balance))
        contribution = value
    elif account_type == AccountType.STOCK:
        value = round_currency(to_main(cost_basis))
        contribution = value
    elif account_type == AccountType.ASSET:
        value = round_currency(to_main(account.initial_balance))
        contribution = value
    elif account_type == AccountType.LOAN:
        value = round_currency(to_main(balance))
        contribution = -value
    elif account_type == AccountType.CREDIT:
        value = round_currency(
            calculate_credit_owed(to_main(account.initial_balance), to_main(balance))
        )
        contribution = -value
    else:
        raise InvalidAccountTypeError(account.type)

    return NetWorthContribution(
        account_id=account.id,
        name=account.name,
        type=account_type,
        currency=account.currency,
        balance=round_currency(balance),
        value_in_main_currency=value,
        contribution=contribution,
    )


def aggregate_net_worth(
    accounts: Iterable[Account],
    entries_by_account: Mapping[int, Sequence[LedgerEntry]],
    holdings: Iterable[HoldingState],
    main_currency: str,
    rate_table: RateTable,
) -> NetWorthSummary:
    """Combine all accounts into per-type totals and a single net worth.

    Per-account values are rounded to cents before summing, so the type
    totals always add up to the reported net worth. Any failing account fails
    the whole aggregate.

    Args:
        accounts: All accounts
        entries_by_account: Ledger entries keyed by account ID
        holdings: Open positions from cost-basis replay
        main_currency: Reporting currency
        rate_table: Supplied exchange rates

    Returns:
        NetWorthSummary in the main currency
    """
    basis = cost_basis_by_account(holdings)
    counts = {t: 0 for t in AccountType}
    totals = {t: ZERO for t in AccountType}
    contributions = []
    net_worth = ZERO

    for account in accounts:
        item = account_contribution(
            account,
            entries_by_account.get(account.id, ()),
            basis.get(account.id, ZERO),
            main_currency,
            rate_table,
        )
        counts[item.type] += 1
        totals[item.type] += item.value_in_main_currency
        net_worth += item.contribution
        contributions.append(item)

    return NetWorthSummary(
        main_currency=main_currency,
        total_net_worth=net_worth,
        by_type={t: TypeTotal(count=counts[t], total=totals[t]) for t in AccountType},
        accounts=tuple(contributions),
    )


class NetWorthService:
    """Service computing net worth from the stored ledgers."""

    def __init__(self, db: Database):
        """Initialize net worth service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings = SettingsService(db)
        self.portfolio = PortfolioService(db)

    def get_summary(self) -> NetWorthSummary:
        """Net worth of all accounts in the main currency."""
        main_currency = self.settings.get_main_currency()
        summary = aggregate_net_worth(
            self.db.list_accounts(),
            group_entries_by_account(self.db.list_entries()),
            self.portfolio.list_holdings(),
            main_currency,
            self.settings.get_rate_table(),
        )
        logger.debug("Net worth %s %s", summary.total_net_worth, main_currency)
        return summary
