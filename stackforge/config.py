"""Stackforge configuration.

Centralised, typed configuration for the generation pipeline. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator


class LLMProvider(str, Enum):
    """Which generative-text backend to talk to."""

    OLLAMA = "ollama"
    GEMINI = "gemini"


DEFAULT_MODELS: dict[LLMProvider, str] = {
    LLMProvider.OLLAMA: "qwen2.5-coder:32b",
    LLMProvider.GEMINI: "gemini-1.5-pro",
}


class ValidationMode(str, Enum):
    """Which validators gate a generation run.

    ``rules`` runs the structural/content validator only, ``official`` runs
    the byte-exact reference differ only, ``both`` runs the rule validator
    first and the differ once the rules pass.
    """

    RULES = "rules"
    OFFICIAL = "official"
    BOTH = "both"

    @property
    def uses_rules(self) -> bool:
        return self in (ValidationMode.RULES, ValidationMode.BOTH)

    @property
    def uses_official(self) -> bool:
        return self in (ValidationMode.OFFICIAL, ValidationMode.BOTH)


class MismatchPolicy(str, Enum):
    """What to do with the project directory when the reference diff fails."""

    DELETE = "delete"
    KEEP = "keep"


class LLMConfig(BaseModel):
    """Configuration for the generative-text service."""

    provider: LLMProvider = Field(default=LLMProvider.OLLAMA)
    url: str = Field(default="http://localhost:11434")
    model: str = Field(default="", description="Empty selects the provider's default model")
    fallback_model: str = Field(default="")
    api_key_env: str = Field(
        default="GEMINI_API_KEY",
        description="Environment variable holding the API key (Gemini only)",
    )
    structure_timeout: int = Field(default=30, ge=1, description="File-list request timeout in seconds")
    content_timeout: int = Field(default=120, ge=1, description="Per-file content request timeout in seconds")
    correction_timeout: int = Field(default=120, ge=1, description="Per-file correction request timeout in seconds")

    @model_validator(mode="after")
    def _default_model_for_provider(self) -> "LLMConfig":
        if not self.model:
            self.model = DEFAULT_MODELS[self.provider]
        return self


class ValidationConfig(BaseModel):
    """Tuning knobs for the validate/correct loop."""

    mode: ValidationMode = Field(default=ValidationMode.RULES)
    official_files_root: Path = Field(
        default=Path("./official"),
        description="Directory holding one reference subtree per stack id",
    )
    max_attempts: int = Field(
        default=3, ge=1, description="Maximum validation rounds before giving up"
    )
    mismatch_policy: MismatchPolicy = Field(default=MismatchPolicy.DELETE)


class Config(BaseModel):
    """Global Stackforge configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``GenerationPipeline``.
    """

    output_dir: Path = Field(default=Path("./output"))
    log_dir: Path = Field(default=Path("./logs"))
    log_level: str = Field(default="INFO")
    log_keep: int = Field(default=10, ge=1, description="How many run logs to retain")
    llm: LLMConfig = Field(default_factory=LLMConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/stackforge.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "stackforge.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STACKFORGE_OUTPUT_DIR, STACKFORGE_LOG_DIR, STACKFORGE_LOG_LEVEL,
            STACKFORGE_LLM_PROVIDER, STACKFORGE_LLM_URL, STACKFORGE_LLM_MODEL,
            STACKFORGE_STRUCTURE_TIMEOUT, STACKFORGE_CONTENT_TIMEOUT,
            STACKFORGE_VALIDATION_MODE, STACKFORGE_OFFICIAL_ROOT,
            STACKFORGE_MAX_ATTEMPTS, STACKFORGE_MISMATCH_POLICY.
        """
        llm_kwargs: dict[str, Any] = {}
        if os.environ.get("STACKFORGE_LLM_PROVIDER"):
            llm_kwargs["provider"] = os.environ["STACKFORGE_LLM_PROVIDER"]
        if os.environ.get("STACKFORGE_LLM_URL"):
            llm_kwargs["url"] = os.environ["STACKFORGE_LLM_URL"]
        if os.environ.get("STACKFORGE_LLM_MODEL"):
            llm_kwargs["model"] = os.environ["STACKFORGE_LLM_MODEL"]
        if os.environ.get("STACKFORGE_STRUCTURE_TIMEOUT"):
            llm_kwargs["structure_timeout"] = int(os.environ["STACKFORGE_STRUCTURE_TIMEOUT"])
        if os.environ.get("STACKFORGE_CONTENT_TIMEOUT"):
            llm_kwargs["content_timeout"] = int(os.environ["STACKFORGE_CONTENT_TIMEOUT"])

        validation_kwargs: dict[str, Any] = {}
        if os.environ.get("STACKFORGE_VALIDATION_MODE"):
            validation_kwargs["mode"] = os.environ["STACKFORGE_VALIDATION_MODE"]
        if os.environ.get("STACKFORGE_OFFICIAL_ROOT"):
            validation_kwargs["official_files_root"] = Path(os.environ["STACKFORGE_OFFICIAL_ROOT"])
        if os.environ.get("STACKFORGE_MAX_ATTEMPTS"):
            validation_kwargs["max_attempts"] = int(os.environ["STACKFORGE_MAX_ATTEMPTS"])
        if os.environ.get("STACKFORGE_MISMATCH_POLICY"):
            validation_kwargs["mismatch_policy"] = os.environ["STACKFORGE_MISMATCH_POLICY"]

        return cls(
            output_dir=Path(os.environ.get("STACKFORGE_OUTPUT_DIR", "./output")),
            log_dir=Path(os.environ.get("STACKFORGE_LOG_DIR", "./logs")),
            log_level=os.environ.get("STACKFORGE_LOG_LEVEL", "INFO"),
            llm=LLMConfig(**llm_kwargs),
            validation=ValidationConfig(**validation_kwargs),
        )
