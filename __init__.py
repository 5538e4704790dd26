"""
DeFi Opportunity Analytics Package.

This package provides the deterministic computation core behind a DeFi
opportunity dashboard:
- Protocol risk scoring (seven weighted factors -> 0-100 score)
- Fee-adjusted yield (gas, bridge, slippage and protocol fees -> net APY)
- Opportunity aggregation (metadata + risk + net yield)
- Risk/reward quadrant classification of opportunity batches
"""

__version__ = "1.0.0"
