"""Engine parameters and their TOML loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_config_file, load_system_configs
from domain.errors import UnknownTierError


class SkillTier(str, Enum):
    """Default skill tiers, weakest first."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    PRO = "PRO"


@dataclass(frozen=True)
class TierDefinition:
    """One row of the tier table: strength ordinal and review threshold."""

    name: str
    ordinal: float
    review_threshold: float


DEFAULT_TIERS: tuple[TierDefinition, ...] = (
    TierDefinition(name=SkillTier.BEGINNER.value, ordinal=1.0, review_threshold=0.40),
    TierDefinition(name=SkillTier.INTERMEDIATE.value, ordinal=2.0, review_threshold=0.45),
    TierDefinition(name=SkillTier.ADVANCED.value, ordinal=2.5, review_threshold=0.48),
    TierDefinition(name=SkillTier.PRO.value, ordinal=3.0, review_threshold=0.50),
)


@dataclass(frozen=True)
class EngineParameters:
    """Policy constants for balancing, rating and review.

    The rating update is a fixed-magnitude step: winners gain ``k_factor``
    and losers lose ``k_factor`` regardless of the rating gap. This is a
    simplified policy, not expected-score Elo.
    """

    initial_rating: int = 1200
    k_factor: int = 16
    min_rating: int = 100
    max_rating: int = 3000
    tier_weight: float = 0.6
    form_weight: float = 0.4
    win_rate_scale: float = 3.0
    recent_form_window: int = 10
    min_games_for_review: int = 10
    tiers: tuple[TierDefinition, ...] = field(default=DEFAULT_TIERS)

    def tier(self, name: str) -> TierDefinition:
        key = _tier_key(name)
        for definition in self.tiers:
            if definition.name == key:
                return definition
        available = ", ".join(definition.name for definition in self.tiers)
        raise UnknownTierError(f"Unknown skill tier {key!r}; expected one of: {available}")

    def tier_ordinal(self, name: str) -> float:
        return self.tier(name).ordinal

    def review_threshold(self, name: str) -> float:
        return self.tier(name).review_threshold

    def tier_names(self) -> tuple[str, ...]:
        return tuple(definition.name for definition in self.tiers)

    def clamp_rating(self, rating: int) -> int:
        return max(self.min_rating, min(self.max_rating, rating))


DEFAULT_PARAMETERS = EngineParameters()


def _tier_key(name: str) -> str:
    if isinstance(name, Enum):
        return str(name.value)
    return str(name)


@dataclass(frozen=True)
class EngineSystemConfig(BaseSystemConfig):
    """Configuration for one engine deployment."""

    parameters: EngineParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_rating": self.parameters.initial_rating,
            "k_factor": self.parameters.k_factor,
            "min_rating": self.parameters.min_rating,
            "max_rating": self.parameters.max_rating,
            "tier_weight": self.parameters.tier_weight,
            "form_weight": self.parameters.form_weight,
            "win_rate_scale": self.parameters.win_rate_scale,
            "recent_form_window": self.parameters.recent_form_window,
            "min_games_for_review": self.parameters.min_games_for_review,
            "tiers": [
                {
                    "name": tier.name,
                    "ordinal": tier.ordinal,
                    "review_threshold": tier.review_threshold,
                }
                for tier in self.parameters.tiers
            ],
        }


def load_engine_configs(config_dir: Path) -> list[EngineSystemConfig]:
    """Load and validate all engine TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_engine_system_config,
        duplicate_name_label="engine",
    )


def load_engine_config(file_path: Path) -> EngineSystemConfig:
    """Load and validate one engine TOML config file."""
    return load_config_file(file_path, _parse_engine_system_config)


def _parse_engine_system_config(raw: dict[str, Any], file_path: Path) -> EngineSystemConfig:
    system_raw = raw.get("system", {})
    rating_raw = raw.get("rating", {})
    strength_raw = raw.get("strength", {})
    selection_raw = raw.get("selection", {})
    review_raw = raw.get("review", {})
    tiers_raw = raw.get("tiers")

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    defaults = DEFAULT_PARAMETERS
    parameters = EngineParameters(
        initial_rating=int(rating_raw.get("initial_rating", defaults.initial_rating)),
        k_factor=int(rating_raw.get("k_factor", defaults.k_factor)),
        min_rating=int(rating_raw.get("min_rating", defaults.min_rating)),
        max_rating=int(rating_raw.get("max_rating", defaults.max_rating)),
        tier_weight=float(strength_raw.get("tier_weight", defaults.tier_weight)),
        form_weight=float(strength_raw.get("form_weight", defaults.form_weight)),
        win_rate_scale=float(strength_raw.get("win_rate_scale", defaults.win_rate_scale)),
        recent_form_window=int(
            selection_raw.get("recent_form_window", defaults.recent_form_window)
        ),
        min_games_for_review=int(
            review_raw.get("min_games_for_review", defaults.min_games_for_review)
        ),
        tiers=defaults.tiers if tiers_raw is None else _parse_tiers(tiers_raw, file_path),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EngineSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _parse_tiers(tiers_raw: Any, file_path: Path) -> tuple[TierDefinition, ...]:
    if not isinstance(tiers_raw, list) or not tiers_raw:
        raise ValueError(f"{file_path}: [[tiers]] must be a non-empty array of tables")

    tiers: list[TierDefinition] = []
    for index, tier_raw in enumerate(tiers_raw):
        tier_name = str(tier_raw.get("name", "")).strip()
        if not tier_name:
            raise ValueError(f"{file_path}: [[tiers]][{index}].name is required")
        if "ordinal" not in tier_raw:
            raise ValueError(f"{file_path}: [[tiers]][{index}].ordinal is required")
        if "review_threshold" not in tier_raw:
            raise ValueError(f"{file_path}: [[tiers]][{index}].review_threshold is required")
        tiers.append(
            TierDefinition(
                name=tier_name,
                ordinal=float(tier_raw["ordinal"]),
                review_threshold=float(tier_raw["review_threshold"]),
            )
        )
    return tuple(tiers)


def _validate_parameters(*, file_path: Path, parameters: EngineParameters) -> None:
    if parameters.k_factor <= 0:
        raise ValueError(f"{file_path}: [rating].k_factor must be > 0")
    if parameters.min_rating <= 0:
        raise ValueError(f"{file_path}: [rating].min_rating must be > 0")
    if parameters.max_rating < parameters.min_rating:
        raise ValueError(f"{file_path}: [rating].max_rating must be >= min_rating")
    if not parameters.min_rating <= parameters.initial_rating <= parameters.max_rating:
        raise ValueError(
            f"{file_path}: [rating].initial_rating must be between min_rating and max_rating"
        )
    if parameters.tier_weight < 0.0:
        raise ValueError(f"{file_path}: [strength].tier_weight must be >= 0")
    if parameters.form_weight < 0.0:
        raise ValueError(f"{file_path}: [strength].form_weight must be >= 0")
    if parameters.tier_weight == 0.0 and parameters.form_weight == 0.0:
        raise ValueError(f"{file_path}: [strength] weights cannot both be 0")
    if parameters.win_rate_scale <= 0.0:
        raise ValueError(f"{file_path}: [strength].win_rate_scale must be > 0")
    if parameters.recent_form_window < 1:
        raise ValueError(f"{file_path}: [selection].recent_form_window must be >= 1")
    if parameters.min_games_for_review < 0:
        raise ValueError(f"{file_path}: [review].min_games_for_review must be >= 0")

    names = [tier.name for tier in parameters.tiers]
    if len(names) != len(set(names)):
        raise ValueError(f"{file_path}: duplicate tier names: {names}")
    for tier in parameters.tiers:
        if not 0.0 <= tier.review_threshold <= 1.0:
            raise ValueError(
                f"{file_path}: tier {tier.name} review_threshold must be between 0 and 1"
            )
    ordinals = [tier.ordinal for tier in parameters.tiers]
    if any(later <= earlier for earlier, later in zip(ordinals, ordinals[1:])):
        raise ValueError(f"{file_path}: tier ordinals must be strictly increasing: {ordinals}")


__all__ = [
    "DEFAULT_PARAMETERS",
    "DEFAULT_TIERS",
    "EngineParameters",
    "EngineSystemConfig",
    "SkillTier",
    "TierDefinition",
    "load_engine_config",
    "load_engine_configs",
]
