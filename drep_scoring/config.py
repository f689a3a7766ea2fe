"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``DREP_SCORING_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Scoring weights
---------------
``ScoringConfig`` is the single, versioned home of every number the scoring
engine uses: pillar weights, reliability sub-weights, importance weights,
treasury tier ceilings, Deliberation Modifier breakpoints, the rationale
curve, profile checklist points and recommendation thresholds.  Its defaults
are the published product weights, so library callers can score without
loading any file::

    from drep_scoring.config import DEFAULT_SCORING_CONFIG

Changing any weight changes what a score *means*; bump ``version`` when you
do, so stored snapshots from different versions are never diffed as if they
were comparable.
"""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

_WEIGHT_TOLERANCE = 1e-6


# ── Scoring sub-config models ─────────────────────────────────────────────────


class PillarWeights(BaseModel):
    """Share of each pillar in the composite score.  Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    participation: float = 0.30
    rationale: float = 0.35
    reliability: float = 0.20
    profile: float = 0.15

    @model_validator(mode="after")
    def validate_sum(self) -> "PillarWeights":
        total = self.participation + self.rationale + self.reliability + self.profile
        if not math.isclose(total, 1.0, abs_tol=_WEIGHT_TOLERANCE):
            raise ValueError(f"Pillar weights must sum to 1.0, got {total:.4f}.")
        return self

    def for_pillar(self, pillar: str) -> float:
        """Return the weight of ``pillar`` (a ``Pillar`` value)."""
        return float(getattr(self, str(pillar)))


class ReliabilityWeights(BaseModel):
    """Share of each sub-score inside the Reliability pillar.  Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    streak: float = 0.35
    recency: float = 0.30
    gap: float = 0.20
    tenure: float = 0.15

    @model_validator(mode="after")
    def validate_sum(self) -> "ReliabilityWeights":
        total = self.streak + self.recency + self.gap + self.tenure
        if not math.isclose(total, 1.0, abs_tol=_WEIGHT_TOLERANCE):
            raise ValueError(f"Reliability weights must sum to 1.0, got {total:.4f}.")
        return self


class ImportanceConfig(BaseModel):
    """Importance weights and treasury tier ceilings (ADA)."""

    model_config = ConfigDict(frozen=True)

    critical_weight: int = 3
    important_weight: int = 2
    standard_weight: int = 1
    treasury_routine_max_ada: float = 1_000_000
    treasury_significant_max_ada: float = 20_000_000

    @model_validator(mode="after")
    def validate_tiers(self) -> "ImportanceConfig":
        if self.treasury_routine_max_ada >= self.treasury_significant_max_ada:
            raise ValueError(
                "treasury_routine_max_ada must be below treasury_significant_max_ada."
            )
        return self


class DeliberationConfig(BaseModel):
    """Deliberation Modifier breakpoints: (dominant share, multiplier) pairs.

    Shares are fractions in [0, 1] and must be strictly increasing; between
    two breakpoints the multiplier is linearly interpolated.
    """

    model_config = ConfigDict(frozen=True)

    breakpoints: list[tuple[float, float]] = [(0.85, 1.00), (0.90, 0.85), (0.95, 0.70)]

    @field_validator("breakpoints")
    @classmethod
    def validate_breakpoints(cls, v: list[tuple[float, float]]) -> list[tuple[float, float]]:
        if not v:
            raise ValueError("At least one deliberation breakpoint is required.")
        shares = [share for share, _ in v]
        if shares != sorted(shares) or len(set(shares)) != len(shares):
            raise ValueError("Deliberation breakpoint shares must be strictly increasing.")
        for share, multiplier in v:
            if not 0.0 <= share <= 1.0 or not 0.0 <= multiplier <= 1.0:
                raise ValueError(
                    f"Deliberation breakpoint ({share}, {multiplier}) outside [0, 1]."
                )
        return v


class RationaleConfig(BaseModel):
    """Rationale quality threshold and the forgiving curve.

    ``curve_points`` is a piecewise-linear map from raw weighted rate to
    curved score, both in percent.  It must start at (0, 0), end at
    (100, 100) and be non-decreasing.
    """

    model_config = ConfigDict(frozen=True)

    min_length: int = 50
    trust_unresolved_url: bool = True
    curve_points: list[tuple[float, float]] = [(0, 0), (20, 30), (60, 70), (100, 100)]

    @field_validator("curve_points")
    @classmethod
    def validate_curve(cls, v: list[tuple[float, float]]) -> list[tuple[float, float]]:
        if len(v) < 2 or tuple(v[0]) != (0, 0) or tuple(v[-1]) != (100, 100):
            raise ValueError("Rationale curve must start at (0, 0) and end at (100, 100).")
        xs = [x for x, _ in v]
        ys = [y for _, y in v]
        if xs != sorted(xs) or len(set(xs)) != len(xs) or ys != sorted(ys):
            raise ValueError("Rationale curve points must be increasing.")
        return v


class ReliabilityConfig(BaseModel):
    """Normalization constants for the reliability sub-scores (in epochs)."""

    model_config = ConfigDict(frozen=True)

    streak_cap_epochs: int = 10
    recency_half_life_epochs: float = 4.0
    gap_ceiling_epochs: int = 12
    tenure_cap_epochs: int = 36


class ProfileConfig(BaseModel):
    """Profile checklist points.  Must sum to 100."""

    model_config = ConfigDict(frozen=True)

    name: int = 15
    bio: int = 10
    objectives: int = 15
    motivations: int = 15
    qualifications: int = 10
    payment_address: int = 10
    social_reference: int = 25
    placeholder_domains: list[str] = [
        "example.com", "example.org", "example.net",
        "localhost", "test.com", "yourwebsite.com",
    ]

    @model_validator(mode="after")
    def validate_sum(self) -> "ProfileConfig":
        total = sum(self.points().values())
        if total != 100:
            raise ValueError(f"Profile checklist points must sum to 100, got {total}.")
        return self

    def points(self) -> dict[str, int]:
        """Checklist field -> points, in display order."""
        return {
            "name": self.name,
            "bio": self.bio,
            "objectives": self.objectives,
            "motivations": self.motivations,
            "qualifications": self.qualifications,
            "payment_address": self.payment_address,
            "social_reference": self.social_reference,
        }


class RecommendationConfig(BaseModel):
    """Per-pillar thresholds and per-recommendation gain caps (points)."""

    model_config = ConfigDict(frozen=True)

    profile_threshold: int = 100
    rationale_threshold: int = 60
    participation_threshold: int = 80
    reliability_threshold: int = 70
    high_priority_below: int = 50
    rationale_high_priority_below: int = 30
    critical_rationale_gain_cap: int = 8
    rationale_backlog_gain_cap: int = 6
    participation_gain_cap: int = 10
    reliability_gain_cap: int = 6
    max_listed_titles: int = 5


class ScoringConfig(BaseModel):
    """Versioned weighting configuration for the whole scoring engine."""

    model_config = ConfigDict(frozen=True)

    version: str = "v3"
    pillar_weights: PillarWeights = PillarWeights()
    reliability_weights: ReliabilityWeights = ReliabilityWeights()
    importance: ImportanceConfig = ImportanceConfig()
    deliberation: DeliberationConfig = DeliberationConfig()
    rationale: RationaleConfig = RationaleConfig()
    reliability: ReliabilityConfig = ReliabilityConfig()
    profile: ProfileConfig = ProfileConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    significant_delta: int = 5


DEFAULT_SCORING_CONFIG = ScoringConfig()


# ── Application sub-config models ─────────────────────────────────────────────


class DataConfig(BaseModel):
    """Filesystem paths for snapshot input and report output."""

    model_config = ConfigDict(frozen=True)

    input_dir: str = "data/snapshots"
    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/drep_scoring.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    CLI commands receive an ``AppConfig`` instance built by ``load_config()``;
    the scoring engine itself only ever sees ``AppConfig.scoring``.
    """

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply DREP_SCORING_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply DREP_SCORING_* env vars to the raw config dict.

    Supported overrides:
      DREP_SCORING_LOG_LEVEL   → raw["logging"]["level"]
      DREP_SCORING_OUTPUT_DIR  → raw["data"]["output_dir"]
      DREP_SCORING_DEBUG       → raw["debug"]
    """
    if log_level := os.environ.get("DREP_SCORING_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("DREP_SCORING_OUTPUT_DIR"):
        raw.setdefault("data", {})["output_dir"] = output_dir

    if debug := os.environ.get("DREP_SCORING_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        scoring=ScoringConfig(**raw.get("scoring", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
