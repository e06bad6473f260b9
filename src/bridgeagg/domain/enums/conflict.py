from enum import Enum


class OnConflict(str, Enum):
    """What an insert does when a row's natural key already exists."""

    ERROR = "error"
    IGNORE = "ignore"
    UPSERT = "upsert"
