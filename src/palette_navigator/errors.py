"""Store outcomes and persistence exceptions."""
from enum import Enum


class Status(str, Enum):
    """Outcome of a store mutation or load."""

    OK = "ok"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    DECODE_ERROR = "decode_error"
    WRITE_ERROR = "write_error"


class StoreError(Exception):
    """Base class for persistence failures."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key


class DecodeError(StoreError):
    """A persisted document could not be decoded into records."""


class WriteError(StoreError):
    """A collection could not be encoded or written."""
