"""
Active navigation category tracking.

Two inputs compete for the active category: an explicit pick by the user
(the top navigation) and route changes reported by the client router.  A
pick usually arrives before the router has finished navigating, so the
route change that follows may still point at the old page.  The tracker
models the pending pick explicitly:

``idle``
    No route has been observed yet.
``manual_pending``
    The user picked a category and the router has not reached a page of
    that category.  Route changes to other categories are ignored while
    the suppression window is open.
``synced``
    The active category agrees with the last observed route, or was
    chosen by it.

A pending pick is resolved as soon as a route of the picked category is
observed; the window only bounds how long an unresolved pick is honoured.
"""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from .navigation import DEFAULT_CATEGORY_ID, category_contains_path, get_category_by_id, get_category_by_path

logger = logging.getLogger(__name__)

IDLE = 'idle'
MANUAL_PENDING = 'manual_pending'
SYNCED = 'synced'

DEFAULT_WINDOW = 0.3


@dataclass
class NavigationState:
    active_category: str = DEFAULT_CATEGORY_ID
    phase: str = IDLE
    pending_since: Optional[float] = None
    last_pathname: Optional[str] = None


class NavigationTracker:
    """State machine deciding the active navigation category."""

    def __init__(
        self,
        state: Optional[NavigationState] = None,
        clock: Callable[[], float] = time.monotonic,
        window: float = DEFAULT_WINDOW,
    ) -> None:
        self.state = state or NavigationState()
        self.clock = clock
        self.window = window

    @property
    def active_category(self) -> str:
        return self.state.active_category

    @property
    def phase(self) -> str:
        return self.state.phase

    def select_category(self, category_id: str) -> str:
        """Record a manual pick; takes effect immediately."""
        self.state.active_category = category_id
        self.state.phase = MANUAL_PENDING
        self.state.pending_since = self.clock()
        logger.debug('navigation: manual selection of %s', category_id)
        return category_id

    def _window_open(self) -> bool:
        since = self.state.pending_since
        return since is not None and (self.clock() - since) < self.window

    def observe_pathname(self, pathname: str) -> str:
        """Feed a route change and return the resulting active category."""
        st = self.state
        if pathname == st.last_pathname:
            return st.active_category
        st.last_pathname = pathname

        if st.phase == MANUAL_PENDING:
            pending = get_category_by_id(st.active_category)
            if pending is not None and category_contains_path(pending, pathname):
                logger.debug('navigation: %s reached for pending %s', pathname, pending.id)
                self._sync()
                return st.active_category
            if self._window_open():
                logger.debug('navigation: ignoring %s, manual selection in progress', pathname)
                return st.active_category
            logger.debug('navigation: manual selection of %s expired', st.active_category)

        current = get_category_by_id(st.active_category)
        if current is not None and category_contains_path(current, pathname):
            logger.debug('navigation: %s belongs to %s, keeping it', pathname, current.id)
        else:
            st.active_category = get_category_by_path(pathname).id
            logger.debug('navigation: %s switches to %s', pathname, st.active_category)
        self._sync()
        return st.active_category

    def _sync(self) -> None:
        self.state.phase = SYNCED
        self.state.pending_since = None

    def to_dict(self) -> dict:
        return asdict(self.state)

    @classmethod
    def from_dict(cls, data: Optional[dict], **kwargs) -> 'NavigationTracker':
        state = NavigationState(**data) if data else None
        return cls(state=state, **kwargs)
