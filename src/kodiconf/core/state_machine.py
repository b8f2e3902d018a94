"""Reload state machine for the configuration pipeline."""

from __future__ import annotations

from enum import Enum, auto
import logging


class ReloadState(Enum):
    IDLE = auto()
    RESOLVING_PATHS = auto()
    VALIDATING_PATHS = auto()
    FETCHING_SETTINGS = auto()
    COERCING = auto()
    DERIVING = auto()
    PUBLISHING = auto()
    ABORTED = auto()


class ReloadEvent(Enum):
    START = auto()
    PATHS_RESOLVED = auto()
    PATHS_VALID = auto()
    PATHS_INVALID = auto()
    SETTINGS_FETCHED = auto()
    COERCED = auto()
    DERIVED = auto()
    PUBLISHED = auto()
    RESET = auto()


_TRANSITIONS = {
    ReloadState.IDLE: {
        ReloadEvent.START: ReloadState.RESOLVING_PATHS,
    },
    ReloadState.RESOLVING_PATHS: {
        ReloadEvent.PATHS_RESOLVED: ReloadState.VALIDATING_PATHS,
    },
    ReloadState.VALIDATING_PATHS: {
        ReloadEvent.PATHS_VALID: ReloadState.FETCHING_SETTINGS,
        ReloadEvent.PATHS_INVALID: ReloadState.ABORTED,
    },
    ReloadState.FETCHING_SETTINGS: {
        ReloadEvent.SETTINGS_FETCHED: ReloadState.COERCING,
    },
    ReloadState.COERCING: {
        ReloadEvent.COERCED: ReloadState.DERIVING,
    },
    ReloadState.DERIVING: {
        ReloadEvent.DERIVED: ReloadState.PUBLISHING,
    },
    ReloadState.PUBLISHING: {
        ReloadEvent.PUBLISHED: ReloadState.IDLE,
    },
    ReloadState.ABORTED: {
        ReloadEvent.RESET: ReloadState.IDLE,
    },
}


class ReloadStateMachine:
    def __init__(self):
        self.state = ReloadState.IDLE

    def transition(self, event: ReloadEvent) -> ReloadState:
        next_state = _TRANSITIONS.get(self.state, {}).get(event, self.state)
        if next_state == self.state and event not in _TRANSITIONS.get(self.state, {}):
            logging.getLogger(__name__).warning(
                "Invalid state transition: %s --%s--> %s", self.state, event, next_state
            )
        self.state = next_state
        return self.state
