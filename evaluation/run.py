"""Prompt benchmark: model x prompt-style quadrants, timing and symbol accuracy."""

import argparse
import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from evaluation.config import BenchConfig
from evaluation.executor import Executor
from evaluation.loader import load_cases
from rosetta_llm.config.settings import get_settings
from rosetta_llm.infrastructure.llm.registry import create_provider

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def summarize(results: list[dict[str, Any]]) -> dict[str, Any]:
    """Average time and accuracy over the successful runs of a quadrant."""
    ok = [r for r in results if not r.get("error")]
    if not ok:
        return {"runs": 0, "avg_ms": None, "avg_accuracy": None, "total_ms": 0, "fallback_used": 0}
    total_ms = sum(r["duration_ms"] for r in ok)
    return {
        "runs": len(ok),
        "avg_ms": total_ms // len(ok),
        "avg_accuracy": sum(r["accuracy"] for r in ok) / len(ok),
        "total_ms": total_ms,
        "fallback_used": sum(1 for r in ok if r["used_fallback"]),
    }


def score(summary: dict[str, Any]) -> float:
    """Prefer accuracy, penalise slow quadrants by 0.01 point per millisecond."""
    if not summary["runs"]:
        return float("-inf")
    return summary["avg_accuracy"] * 100 - summary["avg_ms"] * 0.01


async def run_benchmark(config: BenchConfig) -> dict[str, Any]:
    """Run every quadrant over every case and return results."""
    cases = load_cases(config.data_path)
    executor = Executor(force_threshold=config.force_threshold)

    quadrants: dict[str, dict[str, Any]] = {}
    for model, style in config.quadrants:
        name = f"{model.value}+{style.value}"
        logger.info(f"## Quadrant {name}")
        results = []
        for i, case in enumerate(cases):
            result = await executor.run_case(case, model, style, timeout=config.timeout_per_case)
            results.append(result)
            logger.info(
                f"  [{result.get('duration_ms', '-')}ms] "
                f"{(result.get('accuracy') or 0) * 100:.1f}% acc | {case.label}"
            )
            if config.delay_between_cases and i < len(cases) - 1:
                await asyncio.sleep(config.delay_between_cases)
        quadrants[name] = {"summary": summarize(results), "results": results}

    best = max(quadrants, key=lambda n: score(quadrants[n]["summary"]), default=None)
    return {
        "metadata": {
            "timestamp": datetime.now().isoformat(),
            "total_cases": len(cases),
            "dataset": config.data_path.name,
            "best": best,
        },
        "quadrants": quadrants,
    }


async def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark fallback prompts")
    parser.add_argument("--delay", type=float, default=0.0, help="Delay between cases")
    parser.add_argument("--output", type=str, help="Output JSON path")
    args = parser.parse_args()

    config = BenchConfig(delay_between_cases=args.delay)

    probe = create_provider(get_settings(), config.models[0].value)
    try:
        if not await probe.is_available():
            logger.warning("Skipping benchmark: fallback provider not available")
            return
    finally:
        await probe.close()

    output = await run_benchmark(config)

    print("| Quadrant        | Avg Time | Avg Accuracy | Total Time |")
    print("|-----------------|----------|--------------|------------|")
    for name, data in output["quadrants"].items():
        s = data["summary"]
        if not s["runs"]:
            continue
        print(f"| {name:<15} | {s['avg_ms']:>6}ms | {s['avg_accuracy'] * 100:>10.1f}% | {s['total_ms']:>8}ms |")
    print(f"\nBest combination: {output['metadata']['best']}")

    output_path = Path(args.output) if args.output else config.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2, ensure_ascii=False, default=str)

    logger.info(f"Results saved to {output_path}")


if __name__ == "__main__":
    asyncio.run(main())
