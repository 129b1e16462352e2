from __future__ import annotations

from dataclasses import dataclass


DEFAULT_ATTEMPT_NUMBER = 1


def coerce_attempt_number(value: int) -> int:
    """Non-positive attempt numbers fall back to 1."""
    return value if value > 0 else DEFAULT_ATTEMPT_NUMBER


def parse_attempt_number(text: str | int | None) -> int:
    """Convert the text form of an attempt number (e.g. from a form field).

    Non-numeric or missing input yields the default attempt of 1.
    """
    if isinstance(text, int):
        return coerce_attempt_number(text)
    if text is None:
        return DEFAULT_ATTEMPT_NUMBER
    try:
        value = int(text.strip())
    except ValueError:
        return DEFAULT_ATTEMPT_NUMBER
    return coerce_attempt_number(value)


@dataclass(slots=True)
class TableTestMetadata:
    """Fixed-shape metadata of a table test."""
    title: str = ""
    candidate_name: str = ""
    attempt_number: int = DEFAULT_ATTEMPT_NUMBER

    def __post_init__(self):
        self.attempt_number = coerce_attempt_number(self.attempt_number)

    def copy(self) -> TableTestMetadata:
        return TableTestMetadata(self.title, self.candidate_name, self.attempt_number)
