"""Domain layer for wealthtrack application."""

from importlib import import_module

_SERVICES = {
    "AccountService": "wealthtrack.domain.account",
    "BalanceService": "wealthtrack.domain.balance",
    "PortfolioService": "wealthtrack.domain.cost_basis",
    "DividendService": "wealthtrack.domain.dividends",
    "NetWorthService": "wealthtrack.domain.net_worth",
    "PnLService": "wealthtrack.domain.pnl",
    "ProjectionService": "wealthtrack.domain.projection",
    "RecurringService": "wealthtrack.domain.recurring",
    "SettingsService": "wealthtrack.domain.settings",
    "TransferService": "wealthtrack.domain.transfer",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain.entities; load them
# lazily so either package can be imported first.
def __getattr__(name):
    if name in _SERVICES:
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
