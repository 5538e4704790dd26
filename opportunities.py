"""
Opportunity Aggregation.

Merges protocol metadata, a risk score and a fee-adjusted yield into one
opportunity record. Records are recomputed per request and never persisted.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Iterable, List, Optional, Union

try:
    from .config_schema import ProtocolMeta, RiskModelConfig, FeeModelConfig
    from .fee_calculator import YieldCalculationInput, YieldCalculationResult, calculate_net_yield
    from .risk_scoring import RiskScore, score_protocol
    from . import settings
except ImportError:
    from config_schema import ProtocolMeta, RiskModelConfig, FeeModelConfig
    from fee_calculator import YieldCalculationInput, YieldCalculationResult, calculate_net_yield
    from risk_scoring import RiskScore, score_protocol
    import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpportunityRecord:
    protocol: str
    chain: str
    category: str
    token: str
    tvl: float
    gross_apy: float
    net_apy: Optional[float]
    fee_impact_percent: float
    risk_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_opportunity(
    meta: ProtocolMeta,
    risk_score: Union[RiskScore, float],
    yield_result: YieldCalculationResult,
) -> OpportunityRecord:
    """
    Assemble an opportunity record from already-computed parts.

    Args:
        meta: Protocol metadata (protocol, chain, category, token, tvl)
        risk_score: RiskScore from score_protocol, or a bare 0-100 score
        yield_result: Output of calculate_net_yield

    Returns:
        OpportunityRecord
    """
    score = risk_score.risk_score if isinstance(risk_score, RiskScore) else risk_score

    return OpportunityRecord(
        protocol=meta.protocol,
        chain=meta.chain,
        category=meta.category,
        token=meta.token,
        tvl=meta.tvl,
        gross_apy=yield_result.gross_apy,
        net_apy=yield_result.net_apy,
        fee_impact_percent=yield_result.fee_impact_percent,
        risk_score=score,
    )


def analyze_opportunity(
    meta: ProtocolMeta,
    investment_amount: Optional[float] = None,
    holding_period_days: Optional[float] = None,
    risk_config: Optional[RiskModelConfig] = None,
    fee_config: Optional[FeeModelConfig] = None,
) -> OpportunityRecord:
    """Score, fee-adjust and assemble a single opportunity."""
    risk = score_protocol(meta.protocol, risk_config)
    yield_result = calculate_net_yield(
        YieldCalculationInput(
            protocol=meta.protocol,
            chain=meta.chain,
            gross_apy=meta.gross_apy,
            investment_amount=(
                settings.DEFAULT_INVESTMENT_AMOUNT if investment_amount is None else investment_amount
            ),
            holding_period_days=(
                settings.DEFAULT_HOLDING_PERIOD_DAYS if holding_period_days is None else holding_period_days
            ),
        ),
        fee_config,
    )
    return build_opportunity(meta, risk, yield_result)


def build_opportunities(
    metas: Iterable[ProtocolMeta],
    investment_amount: Optional[float] = None,
    holding_period_days: Optional[float] = None,
    risk_config: Optional[RiskModelConfig] = None,
    fee_config: Optional[FeeModelConfig] = None,
) -> List[OpportunityRecord]:
    """Run analyze_opportunity over a batch, preserving input order."""
    records = [
        analyze_opportunity(meta, investment_amount, holding_period_days, risk_config, fee_config)
        for meta in metas
    ]
    logger.debug("Built %d opportunity records", len(records))
    return records
