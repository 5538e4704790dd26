"""
Fee-Adjusted Yield Calculator.

Converts a gross APY into the net APY an investor actually keeps after the
full round trip: deposit, holding period, withdrawal.

Fee composition (all in USD):
- gas: deposit tx + flat withdrawal cost
- bridge: one-way bridge fee x 2 (deposit and exit both cross a bridge)
- slippage: on principal at deposit, on principal + yield at withdrawal
- protocol: deposit rate on principal, withdrawal rate on principal + yield
- performance: share of gross yield (profit only)
- management: annual rate on principal, prorated over the holding period

Unknown chains/protocols fall back to the configured default rows and the
result records which fallback was used.
"""

import logging
import math
import numbers
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Tuple

try:
    from .config_schema import ChainFeeProfile, ProtocolFeeProfile, FeeModelConfig, default_fee_config
    from .errors import InvalidArgumentError, UnknownReferenceError
    from . import settings
except ImportError:
    from config_schema import ChainFeeProfile, ProtocolFeeProfile, FeeModelConfig, default_fee_config
    from errors import InvalidArgumentError, UnknownReferenceError
    import settings

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class YieldCalculationInput:
    """Position to evaluate. gross_apy is a percentage (10 = 10%)."""
    protocol: str
    chain: str
    gross_apy: float
    investment_amount: float = settings.DEFAULT_INVESTMENT_AMOUNT
    holding_period_days: float = settings.DEFAULT_HOLDING_PERIOD_DAYS


@dataclass(frozen=True)
class FeeBreakdown:
    gas_fees: float
    bridge_fees: float
    slippage_fees: float
    protocol_fees: float
    performance_fee: float
    management_fee: float
    total_fees: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class YieldCalculationResult:
    gross_apy: float
    net_apy: float
    gross_yield: float
    net_yield: float
    fee_breakdown: FeeBreakdown
    fee_impact_percent: float
    used_chain_fallback: bool = False
    used_protocol_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# VALIDATION & LOOKUPS
# =============================================================================

def validate_yield_input(params: YieldCalculationInput) -> None:
    """
    Reject input that would produce NaN/inf or meaningless yields.

    Raises:
        InvalidArgumentError: non-finite values, non-positive amount or
            holding period, negative gross APY
    """
    for name in ("gross_apy", "investment_amount", "holding_period_days"):
        value = getattr(params, name)
        if not isinstance(value, numbers.Real) or isinstance(value, bool) or not math.isfinite(value):
            raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}")

    if params.investment_amount <= 0:
        raise InvalidArgumentError(f"investment_amount must be positive, got {params.investment_amount}")
    if params.holding_period_days <= 0:
        raise InvalidArgumentError(f"holding_period_days must be positive, got {params.holding_period_days}")
    if params.gross_apy < 0:
        raise InvalidArgumentError(f"gross_apy must be non-negative, got {params.gross_apy}")


def get_chain_fees(chain: str, config: FeeModelConfig, strict: bool = False) -> Tuple[ChainFeeProfile, bool]:
    """
    Look up a chain fee profile.

    Returns:
        Tuple of (profile, used_fallback)
    """
    profile = config.chains.get(chain)
    if profile is not None:
        return profile, False
    if strict:
        raise UnknownReferenceError("chain", chain)
    logger.warning("No fee profile for chain %r, using %r", chain, config.default_chain)
    return config.chains[config.default_chain], True


def get_protocol_fees(protocol: str, config: FeeModelConfig, strict: bool = False) -> Tuple[ProtocolFeeProfile, bool]:
    """
    Look up a protocol fee profile.

    Returns:
        Tuple of (profile, used_fallback)
    """
    profile = config.protocols.get(protocol)
    if profile is not None:
        return profile, False
    if strict:
        raise UnknownReferenceError("protocol", protocol)
    logger.warning("No fee profile for protocol %r, using %r", protocol, config.default_protocol)
    return config.protocols[config.default_protocol], True


# =============================================================================
# MAIN CALCULATION
# =============================================================================

def calculate_net_yield(
    params: YieldCalculationInput,
    config: Optional[FeeModelConfig] = None,
    strict: bool = False,
) -> YieldCalculationResult:
    """
    Calculate fee-adjusted yield for a position.

    Args:
        params: Protocol, chain, gross APY, amount and holding period
        config: Fee tables, defaults to the static chain/protocol tables
        strict: Raise UnknownReferenceError instead of falling back on unknown names

    Returns:
        YieldCalculationResult with net APY, USD yields and fee breakdown
    """
    validate_yield_input(params)
    config = config or default_fee_config()

    chain_fees, chain_fallback = get_chain_fees(params.chain, config, strict)
    protocol_fees, protocol_fallback = get_protocol_fees(params.protocol, config, strict)

    amount = params.investment_amount
    period_fraction = params.holding_period_days / DAYS_PER_YEAR

    gross_yield = amount * (params.gross_apy / 100) * period_fraction
    exit_amount = amount + gross_yield

    # Fixed per-transaction costs
    gas_fees = chain_fees.gas_per_tx + chain_fees.withdrawal_fee
    bridge_fees = chain_fees.bridge_fee * 2

    # Percentage-based costs
    slippage_fees = amount * chain_fees.slippage_rate + exit_amount * chain_fees.slippage_rate
    protocol_fee_total = (
        amount * protocol_fees.deposit_fee_rate
        + exit_amount * protocol_fees.withdrawal_fee_rate
    )
    performance_fee = gross_yield * protocol_fees.performance_fee_rate
    management_fee = amount * protocol_fees.management_fee_rate * period_fraction

    total_fees = math.fsum([
        gas_fees,
        bridge_fees,
        slippage_fees,
        protocol_fee_total,
        performance_fee,
        management_fee,
    ])

    net_yield = max(0.0, gross_yield - total_fees)
    net_apy = max(0.0, net_yield / amount * (DAYS_PER_YEAR / params.holding_period_days) * 100)

    if params.gross_apy == 0:
        fee_impact = 0.0
    else:
        fee_impact = (params.gross_apy - net_apy) / params.gross_apy * 100

    return YieldCalculationResult(
        gross_apy=params.gross_apy,
        net_apy=net_apy,
        gross_yield=gross_yield,
        net_yield=net_yield,
        fee_breakdown=FeeBreakdown(
            gas_fees=gas_fees,
            bridge_fees=bridge_fees,
            slippage_fees=slippage_fees,
            protocol_fees=protocol_fee_total,
            performance_fee=performance_fee,
            management_fee=management_fee,
            total_fees=total_fees,
        ),
        fee_impact_percent=fee_impact,
        used_chain_fallback=chain_fallback,
        used_protocol_fallback=protocol_fallback,
    )
