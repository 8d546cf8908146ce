"""Value types and enums for the Delve calculator."""
from dataclasses import dataclass
from enum import Enum
from typing import Union


FLOOR_MIN: int = 1
FLOOR_MAX: int = 8
OVERFLOW_FLOOR: int = 9  # "8+": every wave cleared past floor 8
OVERFLOW_TEXT: str = "8+"


class InvalidFloorError(ValueError):
    """Raised when a floor value cannot be mapped to 1-8 or 8+."""


class View(Enum):
    """Lenses over the same event stream."""
    ALL = "all"          # Persistent, all-time
    SESSION = "session"  # Process lifetime only
    MANUAL = "manual"    # Persistent, user-resettable


class StatMode(Enum):
    """What the front-ends display per item."""
    EXPECTED = "expected"
    LUCK = "luck"


class RewardDisplayMode(Enum):
    """How a reward is displayed and whether it counts toward 'any unique'."""
    SHOW = "show"  # Displayed normally, included in 'any'
    GREY = "grey"  # Displayed greyed out, NOT included in 'any'
    HIDE = "hide"  # Not displayed, NOT included in 'any'

    def counts_toward_any(self) -> bool:
        return self is RewardDisplayMode.SHOW


@dataclass(frozen=True)
class UniqueItem:
    """A tracked unique reward.

    Attributes:
        item_id: Game item id, used as the key in obtained-drop counts
        name: Name as it appears in the loot interface and collection log
        label: Short display label
        rate_field: Attribute of DropRates holding this item's probability
    """
    item_id: int
    name: str
    label: str
    rate_field: str


@dataclass(frozen=True)
class DropRates:
    """Per-item drop probabilities for a single floor."""
    overall_chance: float
    mokhaiotl_cloth: float
    eye_of_ayak: float
    avernic_treads: float
    dom: float

    def rate_for(self, item: UniqueItem) -> float:
        return float(getattr(self, item.rate_field, 0.0))


@dataclass(frozen=True)
class Floor:
    """A completed floor: 1-8, or the 8+ overflow.

    This is the canonical form of a floor at the ingestion boundary.
    Anything the game reports is parsed through Floor.parse before it
    reaches a profile.
    """
    level: int

    def __post_init__(self):
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidFloorError(f"Floor level must be an integer, got {self.level!r}")
        if not FLOOR_MIN <= self.level <= OVERFLOW_FLOOR:
            raise InvalidFloorError(
                f"Floor must be {FLOOR_MIN}-{FLOOR_MAX} or {OVERFLOW_TEXT}, got {self.level}"
            )

    @classmethod
    def overflow(cls) -> "Floor":
        return cls(OVERFLOW_FLOOR)

    @classmethod
    def parse(cls, value: Union["Floor", int, str]) -> "Floor":
        """Parse a floor from an int, a digit string or "8+".

        Integer 9 and the text "8+" are the same floor.

        Raises:
            InvalidFloorError: if the value is not a floor
        """
        if isinstance(value, Floor):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text == OVERFLOW_TEXT:
                return cls.overflow()
            if not text.isdigit():
                raise InvalidFloorError(f"Not a floor: {value!r}")
            return cls(int(text))
        return cls(value)

    @property
    def is_overflow(self) -> bool:
        return self.level == OVERFLOW_FLOOR

    def __str__(self) -> str:
        return OVERFLOW_TEXT if self.is_overflow else str(self.level)


ItemKey = Union[int, str]
