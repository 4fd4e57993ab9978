"""
Per-user navigation tracker storage.

The tracker state survives between requests in the Django cache, so the
clock is wall time rather than a monotonic counter.  Changes go through
``locked_tracker`` so a manual pick and a route report arriving together
are applied one after the other instead of overwriting each other.
"""
from __future__ import annotations

import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Iterator

from django.conf import settings
from django.core.cache import cache

from rolemenu.navigation_state import NavigationTracker

LOCK_TIMEOUT = 5

# locmem caches live in the process, so a process lock is enough for them
_local_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)
_local_locks_guard = threading.Lock()


def state_cache_key(user_id: int) -> str:
    return f'nav:state:{user_id}'


def lock_key(user_id: int) -> str:
    return f'nav:lock:{user_id}'


@contextmanager
def _user_lock(user_id: int) -> Iterator[None]:
    key = lock_key(user_id)
    if hasattr(cache, 'lock'):
        # django-redis
        with cache.lock(key, timeout=LOCK_TIMEOUT, blocking_timeout=LOCK_TIMEOUT):
            yield
        return
    with _local_locks_guard:
        lock = _local_locks[key]
    with lock:
        yield


def load_tracker(user) -> NavigationTracker:
    return NavigationTracker.from_dict(
        cache.get(state_cache_key(user.id)),
        clock=time.time,
        window=settings.NAV_MANUAL_WINDOW_MS / 1000.0,
    )


def save_tracker(user, tracker: NavigationTracker) -> None:
    cache.set(state_cache_key(user.id), tracker.to_dict(), settings.NAV_STATE_TTL)


@contextmanager
def locked_tracker(user) -> Iterator[NavigationTracker]:
    """Load the user's tracker under a per-user lock and save it on exit."""
    with _user_lock(user.id):
        tracker = load_tracker(user)
        yield tracker
        save_tracker(user, tracker)


def reset_tracker(user) -> None:
    cache.delete(state_cache_key(user.id))
