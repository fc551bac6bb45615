"""Round-trip semantic preservation checks."""

from rosetta_llm.services.verification.models import (
    Divergence,
    RoundTripRound,
    RoundTripRun,
    VerificationReport,
)
from rosetta_llm.services.verification.verifier import verify, verify_round_trip

__all__ = [
    "Divergence",
    "RoundTripRound",
    "RoundTripRun",
    "VerificationReport",
    "verify",
    "verify_round_trip",
]
