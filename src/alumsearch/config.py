"""Configuration for scoring, fuzzy fallback and the query controller.

Defaults reproduce the production ranking behavior exactly. Point values
and thresholds were tuned by hand against the live directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from alumsearch.constants import DEBOUNCE_SECONDS, DEFAULT_MAX_SECONDARY
from alumsearch.exceptions import InvalidSearchOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/search_config.json")


@dataclass(frozen=True)
class ScoringWeights:
    """Tier 1 point values and inclusion thresholds."""

    alias_index_match: int = 180
    full_name_exact: int = 150
    quoted_phrase: int = 150
    program_exact: int = 150
    role_exact: int = 300
    name_location_combo: int = 250

    name_word: int = 80
    role_word: int = 120
    program_word: int = 90
    bio_word: int = 50
    status_word: int = 80
    identity_word: int = 80
    location_word: int = 100

    multi_term_bonus: int = 50
    full_coverage_bonus: int = 150
    low_coverage_penalty: int = 50
    low_coverage_ratio: float = 0.6

    min_score: int = 120
    min_coverage: float = 0.6


def _default_field_weights() -> dict[str, float]:
    # Name first, then descending intent strength.
    return {
        "name": 1.0,
        "alias_tokens": 0.6,
        "role_tokens": 0.5,
        "program_tokens": 0.45,
        "production_tokens": 0.45,
        "location_tokens": 0.4,
        "festival_tokens": 0.3,
        "language_tokens": 0.3,
        "season_tokens": 0.3,
        "bio_tokens": 0.25,
        "status_tokens": 0.2,
        "identity_tokens": 0.2,
    }


@dataclass(frozen=True)
class FuzzyConfig:
    """Tier 2 approximate matching settings.

    ``threshold`` is a rapidfuzz similarity in [0, 100]; 65 corresponds
    to a 0.35 normalized distance.
    """

    threshold: float = 65.0
    field_weights: dict[str, float] = field(default_factory=_default_field_weights)


@dataclass(frozen=True)
class SearchConfig:
    """Aggregate configuration for the search engine and controller."""

    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    fuzzy: FuzzyConfig = field(default_factory=FuzzyConfig)
    debounce_seconds: float = DEBOUNCE_SECONDS
    max_secondary: int = DEFAULT_MAX_SECONDARY

    def __post_init__(self) -> None:
        if self.max_secondary <= 0:
            raise InvalidSearchOptions(f"max_secondary must be positive, got {self.max_secondary}")
        if self.debounce_seconds < 0:
            raise InvalidSearchOptions(
                f"debounce_seconds must be non-negative, got {self.debounce_seconds}"
            )

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return asdict(self)


def _known(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.debug("Ignoring unknown %s keys: %s", cls.__name__, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in names}


def load_search_config(config_path: Path | None = None) -> SearchConfig:
    """Load search configuration from JSON, falling back to defaults.

    Reads ``config/search_config.json`` when *config_path* is ``None``.
    A missing file yields the defaults. Recognized keys are merged over
    the defaults; ``fuzzy.field_weights`` entries are merged per field.

    Args:
        config_path: Optional explicit path to a search config JSON file.

    Returns:
        SearchConfig populated from file over defaults.

    Raises:
        InvalidSearchOptions: If the file sets a non-positive max_secondary
            or a negative debounce.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            data = json.load(f)
        logger.debug("Loaded search config from %s", config_path)

    scoring = ScoringWeights(**_known(ScoringWeights, data.get("scoring", {})))

    fuzzy_data = dict(data.get("fuzzy", {}))
    weights = _default_field_weights()
    weights.update({str(k): float(v) for k, v in fuzzy_data.pop("field_weights", {}).items()})
    fuzzy = FuzzyConfig(field_weights=weights, **_known(FuzzyConfig, fuzzy_data))

    top_level = _known(SearchConfig, data)
    top_level.pop("scoring", None)
    top_level.pop("fuzzy", None)
    return SearchConfig(scoring=scoring, fuzzy=fuzzy, **top_level)
