from __future__ import annotations

from typing import Optional, Sequence


class GapSearchError(ValueError):
    """The bounded search could not identify exactly one uncovered point."""


class NoGapFoundError(GapSearchError):
    def __init__(self, domain_limit: int):
        super().__init__(f"No uncovered point found in [0, {domain_limit}] x [0, {domain_limit}]")
        self.domain_limit = domain_limit


class AmbiguousGapError(GapSearchError):
    """More than one candidate point: malformed input or wrong domain size."""

    def __init__(self, message: str, *, row: Optional[int] = None, candidates: Sequence = ()):
        super().__init__(message)
        self.row = row
        self.candidates = tuple(candidates)


class DomainGuaranteeError(GapSearchError):
    """Input can never contain a single uncovered point (e.g. no sensors)."""
