"""Domain enums for repodigest."""

from enum import Enum


class FilterMode(Enum):
    """Polarity applied to pattern matches.

    EXCLUDE removes files that match a pattern; INCLUDE keeps only files
    that match one.
    """

    EXCLUDE = "exclude"
    INCLUDE = "include"

    @classmethod
    def parse(cls, value: "str | FilterMode") -> "FilterMode":
        """Parse a mode name case-insensitively.

        Args:
            value: Mode name ("exclude"/"include", any case) or a FilterMode.

        Returns:
            The matching FilterMode.

        Raises:
            ValueError: If the name is not a known mode.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().casefold()
        for mode in cls:
            if mode.value == normalized:
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"mode must be one of {valid}, got {value!r}")
