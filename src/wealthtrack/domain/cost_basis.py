"""Weighted-average cost basis replay and the holdings cache."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import round_quantity
from wealthtrack.domain.entities import AccountType, HoldingState, StockTransaction, TradeType
from wealthtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    trade_not_found,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def sort_for_replay(transactions: Iterable[StockTransaction]) -> list[StockTransaction]:
    """Order trades by date, then by ID.

    Unsaved trades (``id`` of None) sort after saved trades of the same date,
    in the order they were given.
    """
    indexed = list(enumerate(transactions))
    indexed.sort(
        key=lambda pair: (
            pair[1].date,
            pair[1].id is None,
            pair[1].id if pair[1].id is not None else pair[0],
        )
    )
    return [trade for _, trade in indexed]


def find_oversell(
    transactions: Iterable[StockTransaction],
) -> Optional[tuple[StockTransaction, Decimal]]:
    """Return the first sell that exceeds the shares held, with the shares held then."""
    shares = ZERO
    for trade in sort_for_replay(transactions):
        if trade.type == TradeType.BUY:
            shares += trade.shares
        elif trade.shares > shares:
            return trade, shares
        else:
            shares -= trade.shares
    return None


def replay_holding(
    transactions: Iterable[StockTransaction],
    symbol: Optional[str] = None,
    account_id: Optional[int] = None,
) -> HoldingState:
    """Replay a symbol's trade history into its current position.

    Uses weighted-average cost. Buys add ``shares * price + fees`` to the total
    cost. Sells shrink the total cost proportionally at the average cost before
    the sale, and a sell that closes the position resets the basis to zero.
    Realized gains are not tracked.

    Args:
        transactions: Trades for one (symbol, account) pair, in any order
        symbol: Symbol to stamp on the result
        account_id: Account ID to stamp on the result

    Returns:
        HoldingState with unrounded shares and average cost
    """
    shares = ZERO
    total_cost = ZERO

    for trade in sort_for_replay(transactions):
        if trade.type == TradeType.BUY:
            total_cost += trade.shares * trade.price + trade.fees
            shares += trade.shares
        elif shares > ZERO:
            avg_cost_before = total_cost / shares
            shares -= trade.shares
            if shares <= ZERO:
                shares = ZERO
                total_cost = ZERO
            else:
                total_cost = shares * avg_cost_before

    avg_cost = total_cost / shares if shares > ZERO else ZERO
    return HoldingState(symbol=symbol, account_id=account_id, shares=shares, avg_cost=avg_cost)


def group_trades(
    transactions: Iterable[StockTransaction],
) -> dict[tuple[int, str], list[StockTransaction]]:
    """Group trades by (account ID, symbol)."""
    grouped: dict[tuple[int, str], list[StockTransaction]] = {}
    for trade in transactions:
        grouped.setdefault((trade.account_id, trade.symbol), []).append(trade)
    return grouped


def replay_all(transactions: Iterable[StockTransaction]) -> list[HoldingState]:
    """Replay every (account, symbol) group; closed positions are omitted."""
    states = []
    for (account_id, symbol), trades in sorted(group_trades(transactions).items()):
        state = replay_holding(trades, symbol=symbol, account_id=account_id)
        if state.shares > ZERO:
            states.append(state)
    return states


def cost_basis_by_account(states: Iterable[HoldingState]) -> dict[int, Decimal]:
    """Sum ``shares * avg_cost`` per account."""
    totals: dict[int, Decimal] = {}
    for state in states:
        totals[state.account_id] = totals.get(state.account_id, ZERO) + state.cost_basis
    return totals


class PortfolioService:
    """Service for stock trades and the holdings cache they produce."""

    def __init__(self, db: Database):
        """Initialize portfolio service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_stock_account(self, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.type != AccountType.STOCK:
            raise ValidationError(f"Account {account_id} is not a stock account")

    def _check_no_oversell(self, symbol: str, trades: list[StockTransaction]) -> None:
        problem = find_oversell(trades)
        if problem is None:
            return
        sell, held = problem
        when = sell.date.isoformat()
        if sell.id is None:
            raise ValidationError(
                f"Cannot sell {sell.shares} {symbol}: only {held} shares held on {when}"
            )
        raise ValidationError(
            f"Sell {sell.id} of {sell.shares} {symbol} on {when} would exceed "
            f"the {held} shares held"
        )

    def record_trade(
        self,
        account_id: int,
        symbol: str,
        type: TradeType,
        shares: Decimal,
        price: Decimal,
        date: date,
        fees: Decimal = ZERO,
    ) -> int:
        """Record a buy or sell and refresh the cached holding.

        Args:
            account_id: Stock account ID
            symbol: Ticker symbol (case-insensitive)
            type: Buy or sell
            shares: Number of shares, must be positive
            price: Price per share, must not be negative
            date: Trade date
            fees: Commission paid, must not be negative

        Returns:
            Stock transaction ID

        Raises:
            ValidationError: On invalid values, a non-stock account, or a sell
                that would exceed the shares held at any point in the history
        """
        self._require_stock_account(account_id)
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")
        if shares <= ZERO:
            raise ValidationError("Shares must be positive")
        if price < ZERO:
            raise ValidationError("Price cannot be negative")
        if fees < ZERO:
            raise ValidationError("Fees cannot be negative")

        trade_type = TradeType(type)
        if trade_type == TradeType.SELL:
            candidate = StockTransaction(
                id=None,
                account_id=account_id,
                symbol=symbol,
                type=trade_type,
                shares=shares,
                price=price,
                fees=fees,
                date=date,
            )
            history = self.db.list_stock_transactions(account_id=account_id, symbol=symbol)
            self._check_no_oversell(symbol, history + [candidate])

        trade_id = self.db.create_stock_transaction(
            account_id=account_id,
            symbol=symbol,
            type=trade_type,
            shares=shares,
            price=price,
            fees=fees,
            date=date,
        )
        self.recalculate_holding(account_id, symbol)
        return trade_id

    def delete_trade(self, trade_id: int) -> None:
        """Delete a stock transaction and refresh the cached holding.

        Raises:
            NotFoundError: If the trade does not exist
            ValidationError: If removing a buy would leave a later sell
                larger than the position
        """
        trade = self.db.get_stock_transaction(trade_id)
        if trade is None:
            raise NotFoundError(trade_not_found(trade_id))
        if trade.type == TradeType.BUY:
            remaining = [
                t
                for t in self.db.list_stock_transactions(
                    account_id=trade.account_id, symbol=trade.symbol
                )
                if t.id != trade_id
            ]
            self._check_no_oversell(trade.symbol, remaining)
        self.db.delete_stock_transaction(trade_id)
        self.recalculate_holding(trade.account_id, trade.symbol)

    def recalculate_holding(self, account_id: int, symbol: str) -> HoldingState:
        """Rebuild the cached holding for one (symbol, account) pair from its log."""
        symbol = symbol.strip().upper()
        trades = self.db.list_stock_transactions(account_id=account_id, symbol=symbol)
        state = replay_holding(trades, symbol=symbol, account_id=account_id)

        if state.shares > ZERO:
            self.db.save_holding(
                account_id=account_id,
                symbol=symbol,
                shares=round_quantity(state.shares),
                avg_cost=round_quantity(state.avg_cost),
            )
        else:
            self.db.delete_holding(account_id, symbol)

        logger.info(
            "Recalculated %s in account %s: %s shares @ %s",
            symbol,
            account_id,
            state.shares,
            state.avg_cost,
        )
        return state

    def recalculate_all(self) -> list[HoldingState]:
        """Rebuild every cached holding, dropping rows with no remaining shares."""
        trades = self.db.list_stock_transactions()
        keys = set(group_trades(trades))
        keys.update((h.account_id, h.symbol) for h in self.db.list_holdings())
        return [self.recalculate_holding(account_id, symbol) for account_id, symbol in sorted(keys)]

    def list_holdings(self, account_id: Optional[int] = None) -> list[HoldingState]:
        """Current open positions, recomputed from the trade log."""
        return replay_all(self.db.list_stock_transactions(account_id=account_id))

    def get_cost_basis(self, account_id: int) -> Decimal:
        """Total cost basis of a stock account in its own currency."""
        return cost_basis_by_account(self.list_holdings(account_id)).get(account_id, ZERO)
