"""Domain enumerations."""

from __future__ import annotations

import enum


class Weekday(str, enum.Enum):
    LUNDI = "LUNDI"
    MARDI = "MARDI"
    MERCREDI = "MERCREDI"
    JEUDI = "JEUDI"
    VENDREDI = "VENDREDI"
    SAMEDI = "SAMEDI"
    DIMANCHE = "DIMANCHE"

    @classmethod
    def parse(cls, token: str) -> "Weekday":
        """Case-insensitive lookup; English day names are accepted too."""
        key = token.strip().upper()
        if key in cls.__members__:
            return cls[key]
        if key.lower() in ENGLISH_DAY_NAMES:
            return ENGLISH_DAY_NAMES[key.lower()]
        raise ValueError(f"Unknown weekday: {token!r}")


# Source data (municipal open-data exports) uses English day names
ENGLISH_DAY_NAMES: dict[str, Weekday] = {
    "monday": Weekday.LUNDI,
    "tuesday": Weekday.MARDI,
    "wednesday": Weekday.MERCREDI,
    "thursday": Weekday.JEUDI,
    "friday": Weekday.VENDREDI,
    "saturday": Weekday.SAMEDI,
    "sunday": Weekday.DIMANCHE,
}
