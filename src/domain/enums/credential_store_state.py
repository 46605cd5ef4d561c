"""Lifecycle states of the database credential store."""

from enum import Enum


class CredentialStoreState(str, Enum):
    """Credential store lifecycle.

    UNINITIALIZED -> LOADED (first successful read) -> ROTATION_IN_FLIGHT
    (reload saw a new username) -> DRAIN_GRACE (pool cleared, old connections
    finishing) -> LOADED.
    """

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    ROTATION_IN_FLIGHT = "rotation_in_flight"
    DRAIN_GRACE = "drain_grace"
