"""Per-user serialization of aggregate writes.

Every mutation loads the whole User, changes it and writes the whole User
back. Two overlapping mutations for the same user would let the later write
discard the earlier one, so callers hold ``user_lock(user_id)`` around the
full load-mutate-save cycle. The lock is process-local.
"""

import threading
import weakref
from contextlib import contextmanager

_registry_lock = threading.Lock()

# Entries disappear once no caller holds or waits on the user's lock
_user_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()


def _lock_for(user_id) -> threading.Lock:
    with _registry_lock:
        lock = _user_locks.get(str(user_id))
        if lock is None:
            lock = threading.Lock()
            _user_locks[str(user_id)] = lock
        return lock


@contextmanager
def user_lock(user_id):
    lock = _lock_for(user_id)
    with lock:
        yield
