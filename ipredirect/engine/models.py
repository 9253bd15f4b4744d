from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

DIMENSION_BROWSER_LANGUAGE = "browserLanguage"
DIMENSION_COUNTRY = "countryBasedOnIp"
DIMENSION_DOMAIN = "domain"

WILDCARD = "*"

# Not a valid language id; means "visitor is not on a localized page"
NO_CURRENT_LANGUAGE = -2


@dataclass(frozen=True)
class DimensionWeight:
    exact_match_weight: int = 1
    wildcard_match_weight: int = 1


NEUTRAL_WEIGHT = DimensionWeight()


@dataclass(frozen=True)
class FallbackPolicy:
    candidate_identifier: str = ""
    minimum_acceptable_score: int = 0


@dataclass(frozen=True)
class WeightPolicy:
    dimension_weights: Mapping[str, DimensionWeight] = field(default_factory=dict)
    same_language_override_weight: int = 0
    fallback: FallbackPolicy = field(default_factory=FallbackPolicy)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimension_weights", MappingProxyType(dict(self.dimension_weights)))
        if self.same_language_override_weight < 0:
            object.__setattr__(self, "same_language_override_weight", 0)

    def weight_for(self, dimension: str) -> DimensionWeight:
        return self.dimension_weights.get(dimension, NEUTRAL_WEIGHT)

    @property
    def override_enabled(self) -> bool:
        return self.same_language_override_weight > 0


@dataclass(frozen=True)
class Candidate:
    identifier: str
    language_parameter: int
    accepted_browser_languages: Tuple[str, ...] = ()
    accepted_countries: Tuple[str, ...] = ()
    accepted_domains: Tuple[str, ...] = ()
    page_identifier: Optional[str] = None

    def __post_init__(self) -> None:
        # lists from callers are frozen so the candidate stays hashable
        for name in ("accepted_browser_languages", "accepted_countries", "accepted_domains"):
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class RequestSignals:
    browser_language: str = ""
    country_code: str = ""
    domain: str = ""
    current_language: int = NO_CURRENT_LANGUAGE

    def __post_init__(self) -> None:
        if isinstance(self.current_language, bool) or not isinstance(self.current_language, int):
            raise TypeError(
                f"current_language must be an int, got {type(self.current_language).__name__}"
            )


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: Candidate
    score: int


@dataclass(frozen=True)
class RedirectDecision:
    candidate: Optional[Candidate]
    score: Optional[int]
    used_fallback: bool
    scores: Tuple[ScoredCandidate, ...] = ()

    @property
    def target(self) -> Optional[Tuple[Optional[str], int]]:
        if self.candidate is None:
            return None
        return self.candidate.page_identifier, self.candidate.language_parameter
