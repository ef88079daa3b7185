"""Test run settings: complexity level, random seed and repeat count.

Settings are an explicit object rather than process-wide state. They can be built
directly, loaded from a YAML file, or read from environment variables.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import IntEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from tolerance_kit import hex as hex_codec
from tolerance_kit.logging import configure_logging as configure_json_logging
from tolerance_kit.logging import resolve_level
from tolerance_kit.seeds import RandomSeed, generate_seed

logger = logging.getLogger(__name__)

ENV_TEST_LEVEL = "TOLERANCE_KIT_TEST_LEVEL"
ENV_TEST_SEED = "TOLERANCE_KIT_TEST_SEED"
ENV_TEST_REPEATS = "TOLERANCE_KIT_TEST_REPEATS"
ENV_LOG_LEVEL = "TOLERANCE_KIT_LOG_LEVEL"

SEED_BYTES = 16


class Complexity(IntEnum):
    """Relative cost of a test; higher levels only run when explicitly allowed."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4
    MAXIMUM = 2**31 - 1


class RunSettings(BaseModel):
    """Settings shared by the tests of one run."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    complexity: int = Complexity.NONE
    seed: str = ""
    repeats: int = 1
    log_level: str = "INFO"

    @field_validator("complexity", mode="before")
    @classmethod
    def _validate_complexity(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                return int(text)
            try:
                return Complexity[text.upper()].value
            except KeyError as exc:
                names = ", ".join(member.name for member in Complexity)
                raise ValueError(f"complexity must be an integer or one of: {names}") from exc
        return value

    @field_validator("seed", mode="before")
    @classmethod
    def _validate_seed(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (bytes, bytearray)):
            return hex_codec.encode(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text and not hex_codec.decode(text):
                raise ValueError("seed must be a hex string")
            return text
        raise ValueError("seed must be a hex string or bytes")

    @field_validator("repeats")
    @classmethod
    def _validate_repeats(cls, value: int) -> int:
        return max(1, value)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        return logging.getLevelName(resolve_level(value))

    def allow(self, complexity: Complexity | int) -> bool:
        """True when a test of the given complexity should run."""
        return int(complexity) <= self.complexity

    def configure_logging(self, **kwargs: Any) -> logging.Logger:
        """Configure JSON logging at this run's ``log_level``."""
        return configure_json_logging(log_level=self.log_level, **kwargs)

    def ensure_seed(self) -> RandomSeed:
        """Return the configured seed, generating and logging one when unset."""
        if not self.seed:
            self.seed = hex_codec.encode(generate_seed(SEED_BYTES))
            logger.info("%s=%s", ENV_TEST_SEED, self.seed, extra={"seed": self.seed})
        return RandomSeed.from_hex(self.seed)


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Settings validation failed:"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}")
    return "\n".join(lines)


def load_settings(path: str | Path) -> RunSettings:
    """Load run settings from a YAML file."""

    settings_path = Path(path)
    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Unable to read settings file '{settings_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in settings file '{settings_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Settings file '{settings_path}' must contain a top-level mapping/object."
        )

    try:
        return RunSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(_format_validation_error(exc)) from exc


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    text = environ.get(name)
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, text)
        return default


def settings_from_env(environ: Mapping[str, str] | None = None) -> RunSettings:
    """Build settings from ``TOLERANCE_KIT_*`` environment variables.

    Unparsable numbers fall back to their defaults.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {
        "complexity": _env_int(env, ENV_TEST_LEVEL, Complexity.NONE),
        "repeats": _env_int(env, ENV_TEST_REPEATS, 1),
    }
    if ENV_TEST_SEED in env:
        data["seed"] = env[ENV_TEST_SEED]
    if ENV_LOG_LEVEL in env:
        data["log_level"] = env[ENV_LOG_LEVEL]
    try:
        return RunSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(_format_validation_error(exc)) from exc
