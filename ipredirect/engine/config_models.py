from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Base(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


def _reject_bool(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError("must be an integer, not a boolean")
    return v


# -------------------------
# quantifier section
# -------------------------


class DimensionWeightConfig(_Base):
    # Missing weights are neutral
    total_match: int = Field(default=1, alias="totalMatch", ge=0)
    wild_card_match: int = Field(default=1, alias="wildCardMatch", ge=0)

    reject_bool_weights = field_validator("total_match", "wild_card_match", mode="before")(_reject_bool)


class BrowserLanguageWeightConfig(DimensionWeightConfig):
    # <= 0 (or absent) disables the same-language override
    partial_or_full_match_on_same_language_uid: Optional[int] = Field(
        default=None,
        alias="partialOrFullMatchOnSameLanguageUid",
    )

    reject_bool_override = field_validator("partial_or_full_match_on_same_language_uid", mode="before")(_reject_bool)


class QuantifierConfig(_Base):
    browser_language: BrowserLanguageWeightConfig = Field(
        default_factory=BrowserLanguageWeightConfig,
        alias="browserLanguage",
    )
    country_based_on_ip: DimensionWeightConfig = Field(
        default_factory=DimensionWeightConfig,
        alias="countryBasedOnIp",
    )
    domain: DimensionWeightConfig = Field(default_factory=DimensionWeightConfig)


# -------------------------
# noMatchingConfiguration section
# -------------------------


class NoMatchingConfig(_Base):
    identifier_usage: str = Field(default="", alias="identifierUsage")
    match_min_quantifier: int = Field(default=0, alias="matchMinQuantifier")

    reject_bool_threshold = field_validator("match_min_quantifier", mode="before")(_reject_bool)


# -------------------------
# redirectConfiguration section
# -------------------------


class RuleBodyConfig(_Base):
    browser_languages: List[str] = Field(default_factory=list, alias="browserLanguages")
    countries: List[str] = Field(default_factory=list)
    domains: List[str] = Field(default_factory=list)

    @field_validator("browser_languages", "countries", "domains", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v
