from enum import Enum


class CompanionCheck(str, Enum):
    """Outcome of looking for a companion event in a transaction receipt."""

    CONFIRMED = "confirmed"  # companion event emitted by the expected contract
    ABSENT = "absent"  # receipt read, no companion event
    UNVERIFIED = "unverified"  # receipt unavailable


class ArgTransform(str, Enum):
    """Named conversions applied to decoded event arguments."""

    BYTES32_TO_ADDRESS = "bytes32_to_address"
