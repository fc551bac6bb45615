"""Round-trip verification models."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Divergence:
    """A run whose re-converted output drifted past tolerance."""

    run: int
    expected: str
    actual: str
    similarity: float


@dataclass(frozen=True)
class RoundTripRun:
    """One reverse-then-forward pass."""

    run: int
    prose: str
    output: str
    similarity: float
    exact: bool


@dataclass(frozen=True)
class RoundTripRound:
    """One round of chained prose -> notation -> prose conversion."""

    round: int
    notation: str
    prose: str
    similarity: float
    """Similarity of this round's prose to the original text."""


@dataclass
class VerificationReport:
    """Outcome of a round-trip check. Mismatches are recorded, never raised."""

    runs: list[RoundTripRun] = field(default_factory=list)
    divergences: list[Divergence] = field(default_factory=list)
    rounds: list[RoundTripRound] = field(default_factory=list)
    final_similarity: float | None = None
    drifted: bool = False

    @property
    def ok(self) -> bool:
        return not self.divergences and not self.drifted

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data = asdict(self)
        data["ok"] = self.ok
        return data
