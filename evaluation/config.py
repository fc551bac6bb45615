"""Benchmark configuration."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rosetta_llm.config.constants import LlmModel, PromptStyle


@dataclass
class BenchConfig:
    """Configuration for prompt benchmark runs."""

    # Paths
    data_path: Path = Path(__file__).parent / "data" / "cases.csv"
    results_dir: Path = Path(__file__).parent / "results"

    # Quadrants: every model is paired with every prompt style
    models: list[LlmModel] = field(default_factory=lambda: [LlmModel.HAIKU, LlmModel.SONNET])
    styles: list[PromptStyle] = field(
        default_factory=lambda: [PromptStyle.ENGLISH, PromptStyle.AISP]
    )

    # Execution settings
    delay_between_cases: float = 0.0
    timeout_per_case: float = 120.0
    # Above any deterministic confidence so every case reaches the model
    force_threshold: float = 0.99

    # Run identification
    run_id: str = field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))

    def __post_init__(self) -> None:
        """Ensure directories exist."""
        self.results_dir.mkdir(parents=True, exist_ok=True)

    @property
    def output_path(self) -> Path:
        """Path for results JSON."""
        return self.results_dir / f"{self.run_id}_benchmark.json"

    @property
    def quadrants(self) -> list[tuple[LlmModel, PromptStyle]]:
        return [(model, style) for model in self.models for style in self.styles]
