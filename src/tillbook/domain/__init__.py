"""Domain layer for tillbook application."""

_SERVICES = {
    "CashRegisterService": "tillbook.domain.cash_register",
    "LedgerAggregator": "tillbook.domain.aggregator",
    "RechargeLedger": "tillbook.domain.recharge_ledger",
    "SaleService": "tillbook.domain.sale",
    "ExpenseService": "tillbook.domain.expense",
}

__all__ = list(_SERVICES)


# Services are imported lazily: the database layer imports domain.entities,
# and services import the database layer.
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
