"""Default practice configuration."""

from deckpractice.domain.learning.value_objects import PracticeDirection


class PracticeSettingsService:
    """
    Holds the defaults applied when a session is started without options.

    Values are seeded from application settings and can be changed at
    runtime; the card count never drops below one.
    """

    def __init__(
        self,
        default_count: int = 10,
        default_random_order: bool = True,
        default_direction: PracticeDirection = PracticeDirection.FRONT_TO_BACK,
    ) -> None:
        self._default_count = max(1, default_count)
        self._default_random_order = default_random_order
        self._default_direction = default_direction

    def default_count(self) -> int:
        return self._default_count

    def set_default_count(self, count: int) -> None:
        self._default_count = max(1, count)

    def default_random_order(self) -> bool:
        return self._default_random_order

    def set_default_random_order(self, random_order: bool) -> None:
        self._default_random_order = random_order

    def default_direction(self) -> PracticeDirection:
        return self._default_direction

    def set_default_direction(self, direction: PracticeDirection) -> None:
        self._default_direction = direction
