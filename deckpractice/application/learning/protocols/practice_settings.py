"""Protocol for practice defaults."""

from typing import Protocol

from deckpractice.domain.learning.value_objects import PracticeDirection


class PracticeSettingsProtocol(Protocol):
    """Source of the defaults used when a session is started without options."""

    def default_count(self) -> int: ...

    def default_random_order(self) -> bool: ...

    def default_direction(self) -> PracticeDirection | None: ...
