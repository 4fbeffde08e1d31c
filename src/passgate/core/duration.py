from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class GrantDuration:
    days: int
    is_trial: bool = False

    @property
    def seconds(self) -> int:
        return self.days * SECONDS_PER_DAY


TRIAL = GrantDuration(days=7, is_trial=True)
MONTH = GrantDuration(days=30)
YEAR = GrantDuration(days=365)


class DurationPolicy(Protocol):
    def classify(self, descriptor: str | None) -> GrantDuration: ...


class SubstringDurationPolicy:
    """
    Maps a free-text plan descriptor to a grant duration.

    Rules are checked in order on the lower-cased descriptor and the first
    match wins, so "2027 yearly" is a trial and "$7.00" is too.
    """

    rules: tuple[tuple[str, GrantDuration], ...] = (
        ("7", TRIAL),
        ("30", MONTH),
        ("year", YEAR),
    )
    default: GrantDuration = MONTH

    def classify(self, descriptor: str | None) -> GrantDuration:
        text = (descriptor or "").lower()
        for needle, duration in self.rules:
            if needle in text:
                return duration
        return self.default
