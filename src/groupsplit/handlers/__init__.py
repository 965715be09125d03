from groupsplit.handlers.basic import basic_router
from groupsplit.handlers.expenses import expenses_router
from groupsplit.handlers.participants import participants_router
from groupsplit.handlers.settlement import settlement_router

__all__ = ["basic_router", "expenses_router", "participants_router", "settlement_router"]
