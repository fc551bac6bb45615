"""Dataset loader for benchmark cases."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class BenchCase:
    """Prose plus the symbols a good conversion should contain."""

    id: int
    prose: str
    expected_symbols: list[str]

    @property
    def label(self) -> str:
        return self.prose[:40]


def load_cases(path: Path) -> list[BenchCase]:
    """Load benchmark cases from CSV (`prose`, space-separated `expected_symbols`)."""
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    cases = []

    with open(path, encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)

        for idx, row in enumerate(reader):
            prose = (row.get("prose") or "").strip()
            if not prose:
                continue
            cases.append(
                BenchCase(
                    id=idx,
                    prose=prose,
                    expected_symbols=(row.get("expected_symbols") or "").split(),
                )
            )

    logger.info(f"Loaded {len(cases)} cases from {path}")
    return cases
