"""
Pytest configuration and fixtures for DeFi Opportunity Analytics.

This file contains shared fixtures used across all test modules.
Fixtures follow the pattern: factory functions returning fresh objects.
"""

import pytest
import sys
from pathlib import Path
from typing import Dict, Any, List

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config_schema import (
    RiskFactorRating,
    RiskModelConfig,
    ChainFeeProfile,
    ProtocolFeeProfile,
    FeeModelConfig,
    ProtocolMeta,
)
from opportunities import OpportunityRecord
from risk_tables import RISK_FACTOR_NAMES


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# =============================================================================
# RISK MODEL FIXTURES
# =============================================================================

@pytest.fixture
def rating_factory():
    """
    Factory fixture for ratings.

    Usage:
        def test_something(rating_factory):
            rating = rating_factory(5, exploit_history=9)
    """
    def _create_rating(default: float = 0, **overrides) -> RiskFactorRating:
        values = {name: default for name in RISK_FACTOR_NAMES}
        values.update(overrides)
        return RiskFactorRating(**values)

    return _create_rating


@pytest.fixture
def aave_ratings_dict() -> Dict[str, Any]:
    """Aave ratings in the camelCase shape market feeds use."""
    return {
        "exploitHistory": 1,
        "oracleDependency": 2,
        "tvlConcentration": 2,
        "codeAudit": 1,
        "timeInMarket": 1,
        "governanceRisk": 3,
        "liquidityRisk": 2,
    }


@pytest.fixture
def risk_config_factory(rating_factory):
    """Build a RiskModelConfig where each protocol has every factor at one level."""
    def _create_config(levels: Dict[str, float], **kwargs) -> RiskModelConfig:
        return RiskModelConfig(
            ratings={protocol: rating_factory(level) for protocol, level in levels.items()},
            **kwargs,
        )

    return _create_config


# =============================================================================
# FEE MODEL FIXTURES
# =============================================================================

@pytest.fixture
def zero_fee_config() -> FeeModelConfig:
    """Fee model where every fee is zero, so net yield equals gross yield."""
    return FeeModelConfig(
        chains={"Ethereum": ChainFeeProfile(0, 0, 0, 0)},
        protocols={"Aave": ProtocolFeeProfile()},
    )


@pytest.fixture
def custom_fee_config() -> FeeModelConfig:
    """Small fee model with one fee of each kind."""
    return FeeModelConfig(
        chains={
            "Mainnet": ChainFeeProfile(gas_per_tx=10, bridge_fee=5, slippage_rate=0.01, withdrawal_fee=20),
            "Rollup": ChainFeeProfile(gas_per_tx=1, bridge_fee=2, slippage_rate=0.0, withdrawal_fee=1),
        },
        protocols={
            "Free": ProtocolFeeProfile(),
            "Vault": ProtocolFeeProfile(
                deposit_fee_rate=0.001,
                withdrawal_fee_rate=0.002,
                performance_fee_rate=0.1,
                management_fee_rate=0.02,
            ),
        },
        default_chain="Mainnet",
        default_protocol="Free",
    )


@pytest.fixture
def fee_config_dict() -> Dict[str, Any]:
    """Fee tables in the JSON shape accepted by FeeModelConfig.from_dict."""
    return {
        "chains": {
            "Ethereum": {"gasPerTx": 25, "bridgeFee": 15, "slippageRate": 0.003, "withdrawalFee": 30},
            "Base": {"gas_per_tx": 0.8, "bridge_fee": 2, "slippage_rate": 0.002, "withdrawal_fee": 1.5},
        },
        "protocols": {
            "Aave": {},
            "Yearn": {"performance_fee_rate": 0.2, "management_fee_rate": 0.02},
        },
    }


# =============================================================================
# OPPORTUNITY FIXTURES
# =============================================================================

@pytest.fixture
def opportunity_factory():
    """
    Factory fixture for opportunity records.

    Usage:
        def test_something(opportunity_factory):
            record = opportunity_factory("Aave", net_apy=8.0, risk_score=16)
    """
    def _create_record(protocol: str = "Test", **overrides) -> OpportunityRecord:
        base = {
            "protocol": protocol,
            "chain": "Ethereum",
            "category": "Lending",
            "token": "USDC",
            "tvl": 100_000_000,
            "gross_apy": 10.0,
            "net_apy": 8.0,
            "fee_impact_percent": 20.0,
            "risk_score": 50,
        }
        base.update(overrides)
        return OpportunityRecord(**base)

    return _create_record


@pytest.fixture
def sample_metas() -> List[ProtocolMeta]:
    """Known protocols on known chains."""
    return [
        ProtocolMeta("Aave", "Ethereum", 10.0, category="Lending", token="USDC", tvl=1_000_000_000),
        ProtocolMeta("Venus", "BSC", 12.0, category="Lending", token="USDT", tvl=500_000_000),
        ProtocolMeta("Raydium", "Solana", 20.0, category="DEX", token="SOL", tvl=300_000_000),
        ProtocolMeta("Benqi", "Avalanche", 3.0, category="Staking", token="AVAX", tvl=200_000_000),
    ]


@pytest.fixture
def sample_batch_dicts(sample_metas) -> List[Dict[str, Any]]:
    """sample_metas as JSON-ready dicts."""
    return [meta.to_dict() for meta in sample_metas]
