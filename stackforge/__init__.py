"""Stackforge: LLM-driven project scaffolding with rule-based validation and bounded auto-correction."""

__version__ = "0.1.0"
