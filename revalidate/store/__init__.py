"""
Store — asynchronous key/value adapters the cache persists into.

    from revalidate import store as S

    S.MemoryStore()                       # tests, single process
    S.FileStore("/var/cache/myapp")       # one file per key
    S.SQLAlchemyStore(session_factory)    # any async database, transactional
    S.store_from(read=..., write=..., delete=..., exists=...)

Every method returns kungfu.Result — stores never raise for backend errors.
"""

from revalidate.store._types import (
    StoreErrorKind,
    StoreError,
    Store,
    TransactionalStore,
)
from revalidate.store._serializer import (
    Serializer,
    PickleSerializer,
)
from revalidate.store._memory import (
    MemoryStore,
    TransactionalMemoryStore,
)
from revalidate.store._functional import (
    FunctionalStore,
    store_from,
)
from revalidate.store._file import (
    FileStore,
    ENTRY_SUFFIX,
)

# SQLAlchemy integration (optional import)
try:
    from revalidate.store._sqlalchemy import (
        CacheEntryMixin,
        CacheBase,
        CacheEntryTable,
        create_tables,
        SQLAlchemyStore,
    )
except ImportError:
    pass

__all__ = (
    # Types
    "StoreErrorKind",
    "StoreError",
    "Store",
    "TransactionalStore",
    # Serialization
    "Serializer",
    "PickleSerializer",
    # Stores
    "MemoryStore",
    "TransactionalMemoryStore",
    "FunctionalStore",
    "store_from",
    "FileStore",
    "ENTRY_SUFFIX",
    # SQLAlchemy (optional)
    "CacheEntryMixin",
    "CacheBase",
    "CacheEntryTable",
    "create_tables",
    "SQLAlchemyStore",
)
