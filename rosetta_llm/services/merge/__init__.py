"""Result merge and confidence scoring."""

from rosetta_llm.services.merge.merger import MergePolicy, corroborates, merge

__all__ = ["MergePolicy", "corroborates", "merge"]
