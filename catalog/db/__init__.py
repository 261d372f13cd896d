from catalog.db.database import (
    async_session_maker,
    close_db,
    engine,
    get_session,
    init_db,
    transaction,
)
from catalog.db.seed import seed_categories

__all__ = [
    "async_session_maker",
    "close_db",
    "engine",
    "get_session",
    "init_db",
    "seed_categories",
    "transaction",
]
