from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Map a stored role string onto the canonical enum.

        Older rows and routes spell the faculty role "teacher"; both
        spellings resolve to Role.FACULTY here so only one name travels
        past the data boundary.
        """
        normalized = (value or "").strip().lower()
        if normalized == "teacher":
            return cls.FACULTY
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}")
