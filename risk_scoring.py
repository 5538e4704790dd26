"""
Protocol Risk Scoring.

Maps a protocol's seven factor ratings (0-10, higher = riskier) to a single
0-100 composite risk score plus a weighted per-factor breakdown.

    weighted_score = sum(rating[f] * weight[f])   # 0-10, weights sum to 1
    risk_score     = round(weighted_score * 10)   # clamped to [0, 100]

Protocols missing from the ratings table get a fixed medium-high score and no
breakdown. This is a documented fallback, not an error; the substitution is
logged and flagged on the result.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional

try:
    from .config_schema import RiskFactorRating, RiskWeights, RiskModelConfig, default_risk_config
    from .errors import UnknownReferenceError
    from .risk_tables import RISK_FACTOR_NAMES, RISK_FACTOR_DESCRIPTIONS, RISK_LEVELS
except ImportError:
    from config_schema import RiskFactorRating, RiskWeights, RiskModelConfig, default_risk_config
    from errors import UnknownReferenceError
    from risk_tables import RISK_FACTOR_NAMES, RISK_FACTOR_DESCRIPTIONS, RISK_LEVELS

logger = logging.getLogger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100


@dataclass(frozen=True)
class RiskScore:
    """Composite risk score for one protocol."""
    protocol: str
    risk_score: int
    risk_level: str
    breakdown: Optional[Dict[str, Dict[str, Any]]] = None
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def clamp_score(score: float) -> int:
    return int(max(SCORE_MIN, min(SCORE_MAX, score)))


def risk_level_for_score(score: float) -> str:
    """Map a 0-100 risk score to its level label (Low / Medium / High)."""
    for level, config in RISK_LEVELS.items():
        if score <= config["max"]:
            return level
    return "High"


def calculate_weighted_score(rating: RiskFactorRating, weights: RiskWeights) -> float:
    """
    Weighted sum of factor ratings.

    Returns:
        Score on the 0-10 rating scale
    """
    return math.fsum(rating.get(name) * weights.get(name) for name in RISK_FACTOR_NAMES)


def get_risk_breakdown(rating: RiskFactorRating, weights: RiskWeights) -> Dict[str, Dict[str, Any]]:
    """Per-factor score, weight and description, in canonical factor order."""
    return {
        name: {
            "score": rating.get(name),
            "weight": weights.get(name),
            "description": RISK_FACTOR_DESCRIPTIONS[name],
        }
        for name in RISK_FACTOR_NAMES
    }


# =============================================================================
# SCORING
# =============================================================================

def score_protocol(
    protocol: str,
    config: Optional[RiskModelConfig] = None,
    strict: bool = False,
) -> RiskScore:
    """
    Calculate the composite risk score for a protocol.

    Args:
        protocol: Protocol name as it appears in the ratings table (e.g., "Aave")
        config: Ratings and weights to score against, defaults to the static tables
        strict: Raise UnknownReferenceError instead of falling back for unknown protocols

    Returns:
        RiskScore with score, level, breakdown and fallback flag
    """
    config = config or default_risk_config()
    rating = config.ratings.get(protocol)

    if rating is None:
        if strict:
            raise UnknownReferenceError("protocol", protocol)
        logger.warning(
            "No risk ratings for protocol %r, using fallback score %d",
            protocol, config.unknown_protocol_score,
        )
        return RiskScore(
            protocol=protocol,
            risk_score=config.unknown_protocol_score,
            risk_level=risk_level_for_score(config.unknown_protocol_score),
            breakdown=None,
            used_fallback=True,
        )

    weighted_score = calculate_weighted_score(rating, config.weights)
    risk_score = clamp_score(round_half_up(weighted_score * 10))

    return RiskScore(
        protocol=protocol,
        risk_score=risk_score,
        risk_level=risk_level_for_score(risk_score),
        breakdown=get_risk_breakdown(rating, config.weights),
    )


def score_all_protocols(config: Optional[RiskModelConfig] = None) -> List[RiskScore]:
    """Score every protocol in the ratings table, in table order."""
    config = config or default_risk_config()
    return [score_protocol(protocol, config) for protocol in config.ratings]
