"""
Configuration Schema for Opportunity Analytics.

Immutable configuration objects consumed by the scoring and fee modules:
1. Risk model: per-protocol factor ratings + factor weights
2. Fee model: per-chain and per-protocol fee profiles + fallback rows
3. Protocol metadata: the per-opportunity input supplied by callers

Defaults are built once from the static tables in risk_tables/fee_tables.
Custom tables can be loaded from a dict or a JSON file, so tests and callers
can inject their own reference data without touching module state.
"""

import json
import math
import numbers
import re
from dataclasses import dataclass, field, asdict, fields
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Any, List, Mapping

try:
    from .errors import ConfigError, InvalidArgumentError
    from .risk_tables import RISK_FACTORS, RISK_FACTOR_NAMES, PROTOCOL_RISK_RATINGS
    from .fee_tables import CHAIN_FEES, PROTOCOL_FEES
    from . import settings
except ImportError:
    from errors import ConfigError, InvalidArgumentError
    from risk_tables import RISK_FACTORS, RISK_FACTOR_NAMES, PROTOCOL_RISK_RATINGS
    from fee_tables import CHAIN_FEES, PROTOCOL_FEES
    import settings


WEIGHT_TOLERANCE = 1e-9
RATING_MIN = 0
RATING_MAX = 10
SCORE_MIN = 0
SCORE_MAX = 100


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _snake_case(key: str) -> str:
    """Accept camelCase table keys (exploitHistory -> exploit_history)."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _factor_values(data: Dict[str, Any], what: str) -> Dict[str, float]:
    values = {_snake_case(k): v for k, v in data.items()}
    missing = [name for name in RISK_FACTOR_NAMES if name not in values]
    if missing:
        raise ConfigError(f"{what} missing factors: {missing}")
    unknown = [name for name in values if name not in RISK_FACTOR_NAMES]
    if unknown:
        raise ConfigError(f"{what} has unknown factors: {unknown}")
    return values


# =============================================================================
# RISK MODEL
# =============================================================================

@dataclass(frozen=True)
class RiskFactorRating:
    """Seven 0-10 sub-scores for one protocol (0 = safest)."""
    exploit_history: float
    oracle_dependency: float
    tvl_concentration: float
    code_audit: float
    time_in_market: float
    governance_risk: float
    liquidity_risk: float

    def __post_init__(self):
        for name in RISK_FACTOR_NAMES:
            value = getattr(self, name)
            if not _is_finite_number(value):
                raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}")
            if not RATING_MIN <= value <= RATING_MAX:
                raise InvalidArgumentError(
                    f"{name} must be within [{RATING_MIN}, {RATING_MAX}], got {value}"
                )

    def get(self, factor: str) -> float:
        return getattr(self, factor)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskFactorRating":
        return cls(**_factor_values(data, "Rating"))


@dataclass(frozen=True)
class RiskWeights:
    """Factor weights in (0, 1], summing to 1.0."""
    exploit_history: float
    oracle_dependency: float
    tvl_concentration: float
    code_audit: float
    time_in_market: float
    governance_risk: float
    liquidity_risk: float

    def __post_init__(self):
        for name in RISK_FACTOR_NAMES:
            value = getattr(self, name)
            if not _is_finite_number(value) or not 0 < value <= 1:
                raise ConfigError(f"Weight for {name} must be within (0, 1], got {value}")
        total = self.total()
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ConfigError(f"Risk weights sum to {total}, expected 1.0")

    def get(self, factor: str) -> float:
        return getattr(self, factor)

    def total(self) -> float:
        return math.fsum(getattr(self, name) for name in RISK_FACTOR_NAMES)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskWeights":
        return cls(**_factor_values(data, "Weights"))


def default_risk_weights() -> RiskWeights:
    return RiskWeights(**{name: factor["weight"] for name, factor in RISK_FACTORS.items()})


@dataclass(frozen=True)
class RiskModelConfig:
    """
    Reference data for the risk scoring model.

    ratings is exposed as a read-only mapping; instances are safe to share
    across threads.
    """
    ratings: Mapping[str, RiskFactorRating]
    weights: RiskWeights = field(default_factory=default_risk_weights)
    unknown_protocol_score: int = settings.UNKNOWN_PROTOCOL_RISK_SCORE

    def __post_init__(self):
        object.__setattr__(self, "ratings", MappingProxyType(dict(self.ratings)))
        score = self.unknown_protocol_score
        if not isinstance(score, numbers.Integral) or isinstance(score, bool) or not SCORE_MIN <= score <= SCORE_MAX:
            raise ConfigError(
                f"unknown_protocol_score must be an integer within [{SCORE_MIN}, {SCORE_MAX}], got {score!r}"
            )

    def protocols(self) -> List[str]:
        return list(self.ratings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskModelConfig":
        """
        Create from a dictionary (e.g., loaded from JSON).

        Expected shape:
            {
                "ratings": {"Aave": {"exploit_history": 1, ...}, ...},
                "weights": {...},                 # optional, defaults to RISK_FACTORS
                "unknown_protocol_score": 65      # optional
            }
        """
        if "ratings" not in data:
            raise ConfigError("Risk config requires a 'ratings' section")

        ratings = {
            protocol: RiskFactorRating.from_dict(values)
            for protocol, values in data["ratings"].items()
        }
        kwargs: Dict[str, Any] = {"ratings": ratings}
        if data.get("weights"):
            kwargs["weights"] = RiskWeights.from_dict(data["weights"])
        if data.get("unknown_protocol_score") is not None:
            kwargs["unknown_protocol_score"] = int(data["unknown_protocol_score"])
        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, file_path: str) -> "RiskModelConfig":
        with open(file_path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


@lru_cache(maxsize=1)
def default_risk_config() -> RiskModelConfig:
    """Risk model built from the static protocol ratings table."""
    return RiskModelConfig(
        ratings={
            protocol: RiskFactorRating(**values)
            for protocol, values in PROTOCOL_RISK_RATINGS.items()
        },
    )


# =============================================================================
# FEE MODEL
# =============================================================================

@dataclass(frozen=True)
class ChainFeeProfile:
    """Per-chain costs. USD amounts except slippage_rate (fraction)."""
    gas_per_tx: float
    bridge_fee: float
    slippage_rate: float
    withdrawal_fee: float

    def __post_init__(self):
        for name, value in asdict(self).items():
            if not _is_finite_number(value) or value < 0:
                raise ConfigError(f"Chain fee {name} must be a finite non-negative number, got {value!r}")
        if self.slippage_rate >= 1:
            raise ConfigError(f"slippage_rate must be below 1, got {self.slippage_rate}")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ProtocolFeeProfile:
    """Per-protocol fee rates, all fractions."""
    deposit_fee_rate: float = 0.0
    withdrawal_fee_rate: float = 0.0
    performance_fee_rate: float = 0.0
    management_fee_rate: float = 0.0

    def __post_init__(self):
        for name, value in asdict(self).items():
            if not _is_finite_number(value) or not 0 <= value <= 1:
                raise ConfigError(f"Protocol fee {name} must be a number within [0, 1], got {value!r}")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class FeeModelConfig:
    """
    Reference data for the fee calculator.

    default_chain / default_protocol name the rows substituted when a lookup
    misses; both must exist in their tables.
    """
    chains: Mapping[str, ChainFeeProfile]
    protocols: Mapping[str, ProtocolFeeProfile]
    default_chain: str = settings.DEFAULT_CHAIN
    default_protocol: str = settings.DEFAULT_FEE_PROTOCOL

    def __post_init__(self):
        object.__setattr__(self, "chains", MappingProxyType(dict(self.chains)))
        object.__setattr__(self, "protocols", MappingProxyType(dict(self.protocols)))
        if self.default_chain not in self.chains:
            raise ConfigError(f"Default chain {self.default_chain!r} not in chain fee table")
        if self.default_protocol not in self.protocols:
            raise ConfigError(f"Default protocol {self.default_protocol!r} not in protocol fee table")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeeModelConfig":
        """
        Create from a dictionary (e.g., loaded from JSON).

        Expected shape:
            {
                "chains": {"Ethereum": {"gas_per_tx": 25, ...}, ...},
                "protocols": {"Aave": {"deposit_fee_rate": 0, ...}, ...},
                "default_chain": "Ethereum",      # optional
                "default_protocol": "Aave"        # optional
            }
        """
        for section in ("chains", "protocols"):
            if section not in data:
                raise ConfigError(f"Fee config requires a '{section}' section")

        try:
            chains = {
                name: ChainFeeProfile(**{_snake_case(k): v for k, v in values.items()})
                for name, values in data["chains"].items()
            }
            protocols = {
                name: ProtocolFeeProfile(**{_snake_case(k): v for k, v in values.items()})
                for name, values in data["protocols"].items()
            }
        except TypeError as e:
            raise ConfigError(f"Malformed fee profile: {e}") from e

        kwargs: Dict[str, Any] = {"chains": chains, "protocols": protocols}
        for key in ("default_chain", "default_protocol"):
            if data.get(key):
                kwargs[key] = data[key]
        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, file_path: str) -> "FeeModelConfig":
        with open(file_path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


@lru_cache(maxsize=1)
def default_fee_config() -> FeeModelConfig:
    """Fee model built from the static chain/protocol fee tables."""
    return FeeModelConfig(
        chains={name: ChainFeeProfile(**values) for name, values in CHAIN_FEES.items()},
        protocols={name: ProtocolFeeProfile(**values) for name, values in PROTOCOL_FEES.items()},
    )


# =============================================================================
# PROTOCOL METADATA (caller input)
# =============================================================================

@dataclass(frozen=True)
class ProtocolMeta:
    """Market data for one opportunity, sourced from a market-data provider."""
    protocol: str
    chain: str
    gross_apy: float
    category: str = "Unknown"
    token: str = "Unknown"
    tvl: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProtocolMeta":
        values = dict(data)
        # Market feeds report the rate as "apy"
        if "gross_apy" not in values and "apy" in values:
            values["gross_apy"] = values.pop("apy")
        known = {f.name for f in fields(cls)}
        missing = [name for name in ("protocol", "chain", "gross_apy") if name not in values]
        if missing:
            raise ConfigError(f"Protocol metadata missing required fields: {missing}")
        return cls(**{k: v for k, v in values.items() if k in known})


# =============================================================================
# VALIDATION
# =============================================================================

def validate_risk_config(config: RiskModelConfig) -> Dict[str, Any]:
    """
    Validate a risk model configuration.

    Range, fallback-score and weight-sum invariants are enforced at
    construction; this reports the remaining problems.

    Returns:
        Dict with:
        - is_valid: bool
        - errors: List of error messages
        - warnings: List of warning messages
    """
    errors = []
    warnings = []

    if not config.ratings:
        warnings.append("Ratings table is empty - every protocol will use the fallback score")

    for protocol in config.ratings:
        if protocol != protocol.strip():
            warnings.append(f"Protocol name {protocol!r} has surrounding whitespace")

    return {
        "is_valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def validate_fee_config(config: FeeModelConfig) -> Dict[str, Any]:
    """
    Validate a fee model configuration.

    Fee values and rate ranges are enforced when each profile is built.

    Returns:
        Dict with is_valid, errors and warnings (same shape as validate_risk_config)
    """
    errors = []
    warnings = []

    default_profile = config.protocols[config.default_protocol]
    if any(default_profile.to_dict().values()):
        warnings.append(
            f"Default protocol {config.default_protocol!r} charges fees - "
            "unknown protocols will inherit them"
        )

    return {
        "is_valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def load_protocol_metas(data: List[Dict[str, Any]]) -> List[ProtocolMeta]:
    """Parse a batch of protocol metadata dicts, preserving order."""
    return [ProtocolMeta.from_dict(item) for item in data]


def get_example_batch() -> List[ProtocolMeta]:
    """Example opportunity batch, used as a template and documentation."""
    return [
        ProtocolMeta("Aave", "Ethereum", 4.2, category="Lending", token="USDC", tvl=12_400_000_000),
        ProtocolMeta("Curve", "Ethereum", 7.8, category="DEX", token="USDT", tvl=2_100_000_000),
        ProtocolMeta("Yearn", "Ethereum", 14.5, category="Yield Farming", token="ETH", tvl=310_000_000),
        ProtocolMeta("Raydium", "Solana", 22.0, category="DEX", token="SOL", tvl=750_000_000),
        ProtocolMeta("Venus", "BSC", 11.3, category="Lending", token="USDT", tvl=1_300_000_000),
        ProtocolMeta("Benqi", "Avalanche", 6.1, category="Staking", token="AVAX", tvl=420_000_000),
    ]
