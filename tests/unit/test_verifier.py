"""Tests for round-trip verification."""

import pytest

from rosetta_llm.config.settings import Settings
from rosetta_llm.errors import ReverseConverterError
from rosetta_llm.services.verification.verifier import verify, verify_round_trip


def test_exact_inverses_have_no_divergences():
    report = verify("F(a)", lambda s: "a", 5, lambda p: "F(a)")
    assert report.ok
    assert report.divergences == []
    assert len(report.runs) == 5
    assert all(run.exact for run in report.runs)


def test_mismatch_is_recorded_not_raised():
    report = verify("x≜5", lambda s: "x is 5", 3, lambda p: "∀y∈T")
    assert not report.ok
    assert [d.run for d in report.divergences] == [0, 1, 2]
    assert report.divergences[0].expected == "x≜5"
    assert report.divergences[0].actual == "∀y∈T"


def test_within_tolerance():
    forward = "a b c d e f g h i j"
    drifted = "a b c d e f g h i k"
    strict = verify(forward, lambda s: s, 1, lambda p: drifted)
    loose = verify(forward, lambda s: s, 1, lambda p: drifted, tolerance=0.8)
    assert not strict.ok
    assert loose.ok
    assert loose.runs[0].exact is False


def test_reverse_failure_raises():
    def broken(_):
        raise RuntimeError("unknown symbol")

    with pytest.raises(ReverseConverterError):
        verify("x", broken, 1, lambda p: "x")


def test_repeat_count_must_be_positive():
    with pytest.raises(ValueError):
        verify("x", lambda s: s, 0, lambda p: p)


def test_verify_round_trip_stable_text(settings):
    report = verify_round_trip("for all x in S", 5, settings=settings)
    assert report.ok
    assert len(report.rounds) == 5
    assert report.rounds[0].notation == "∀x∈S"
    assert all(r.prose == "for all x in S" for r in report.rounds)
    assert report.final_similarity == 1.0
    assert report.drifted is False


def test_verify_round_trip_reports_drift():
    settings = Settings(_env_file=None, round_trip_drift_threshold=0.9)
    report = verify_round_trip(
        "The quantum entanglement manifests probabilistic correlation", 2, settings=settings
    )
    assert report.final_similarity == 0.5
    assert report.drifted is True
    assert not report.ok
    assert report.to_dict()["ok"] is False


def test_verify_round_trip_rejects_blank(settings):
    with pytest.raises(ValueError):
        verify_round_trip("  ", settings=settings)
