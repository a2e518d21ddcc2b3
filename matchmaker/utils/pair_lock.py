import hashlib
import threading
import weakref
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.orm import Session

from matchmaker.core.database import is_postgres
from matchmaker.models.match import make_pair_key

_registry_lock = threading.Lock()
_pair_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()


def _local_lock(pair_key: str) -> threading.Lock:
    with _registry_lock:
        lock = _pair_locks.get(pair_key)
        if lock is None:
            lock = threading.Lock()
            _pair_locks[pair_key] = lock
        return lock


def advisory_key(pair_key: str) -> int:
    """Signed 64-bit key for pg_advisory_xact_lock"""
    digest = hashlib.sha256(pair_key.encode()).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


@contextmanager
def pair_lock(db: Session, user_a_id: UUID, user_b_id: UUID):
    """
    Serialize work on one unordered pair of users.

    Holds an in-process lock for the whole block and, on PostgreSQL, a
    transaction-scoped advisory lock so other workers queue behind it too.
    The caller must commit or roll back inside the block.
    """
    pair_key = make_pair_key(user_a_id, user_b_id)
    lock = _local_lock(pair_key)

    with lock:
        if is_postgres(db):
            db.execute(
                text("SELECT pg_advisory_xact_lock(:key)"),
                {"key": advisory_key(pair_key)},
            )
        yield pair_key
