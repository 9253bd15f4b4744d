from .candidates import CandidateSet, build_identifier
from .errors import ConfigurationError, IpRedirectError
from .models import (
    NO_CURRENT_LANGUAGE,
    WILDCARD,
    Candidate,
    DimensionWeight,
    FallbackPolicy,
    RedirectDecision,
    RequestSignals,
    ScoredCandidate,
    WeightPolicy,
)
from .quantifier import dimension_score, language_score, score_all
from .selection import lookup_by_identifier, select_best

__all__ = [
    "CandidateSet",
    "build_identifier",
    "ConfigurationError",
    "IpRedirectError",
    "NO_CURRENT_LANGUAGE",
    "WILDCARD",
    "Candidate",
    "DimensionWeight",
    "FallbackPolicy",
    "RedirectDecision",
    "RequestSignals",
    "ScoredCandidate",
    "WeightPolicy",
    "dimension_score",
    "language_score",
    "score_all",
    "lookup_by_identifier",
    "select_best",
]
