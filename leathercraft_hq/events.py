"""events.py — Typed events fed into the DashboardCoordinator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionEstablished:
    user_id: str


@dataclass(frozen=True)
class SessionFailed:
    error: Exception


@dataclass(frozen=True)
class SnapshotReceived:
    collection: str
    records: tuple


@dataclass(frozen=True)
class SubscriptionFailed:
    collection: str
    error: Exception


@dataclass(frozen=True)
class SessionClosed:
    pass


@dataclass(frozen=True)
class SessionSignedOut:
    """The identity went away while the session (and its auth watch) stays open."""
