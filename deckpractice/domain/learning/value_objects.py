"""Enumerations used by the practice engine."""

from enum import Enum


class PracticeDirection(str, Enum):
    """Which side of a card is shown as the question."""

    FRONT_TO_BACK = "FRONT_TO_BACK"
    BACK_TO_FRONT = "BACK_TO_FRONT"


class PracticeOrder(str, Enum):
    """How the session queue is ordered."""

    RANDOM = "RANDOM"
    SEQUENTIAL = "SEQUENTIAL"


class FilterOption(str, Enum):
    """Known-status filter applied to card listings and counts."""

    ALL = "ALL"
    KNOWN_ONLY = "KNOWN_ONLY"
    UNKNOWN_ONLY = "UNKNOWN_ONLY"
