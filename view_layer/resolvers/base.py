"""Shared resolver types."""

from enum import Enum


class LookupFailure(str, Enum):
    """Why the last lookup of a resolver failed."""

    NONE = "NONE"
    NOT_FOUND = "NOT_FOUND"
    NO_RESOLVERS = "NO_RESOLVERS"
    INVALID_RESOLVER = "INVALID_RESOLVER"
    NO_PATHS = "NO_PATHS"
