"""
Fee Reference Data.

Chain fees are absolute USD costs per transaction plus a slippage fraction.
Protocol fees are fractions of the amount they apply to:
- deposit/withdrawal: swap or entry/exit fee on the moved amount
- performance: share of profit taken by the protocol
- management: annual fee on principal, prorated over the holding period
"""

# =============================================================================
# CHAIN FEES (USD)
# =============================================================================

CHAIN_FEES = {
    "Ethereum": {
        "gas_per_tx": 25,        # Average gas cost per transaction
        "bridge_fee": 15,        # One-way bridge fee to/from Ethereum
        "slippage_rate": 0.003,  # 0.3% average slippage
        "withdrawal_fee": 30,    # Withdrawal gas cost
    },
    "Solana": {
        "gas_per_tx": 0.01,
        "bridge_fee": 5,
        "slippage_rate": 0.002,
        "withdrawal_fee": 0.02,
    },
    "BSC": {
        "gas_per_tx": 0.5,
        "bridge_fee": 3,
        "slippage_rate": 0.005,
        "withdrawal_fee": 1,
    },
    "Avalanche": {
        "gas_per_tx": 2,
        "bridge_fee": 8,
        "slippage_rate": 0.003,
        "withdrawal_fee": 3,
    },
    "Sui": {
        "gas_per_tx": 0.1,
        "bridge_fee": 4,
        "slippage_rate": 0.004,
        "withdrawal_fee": 0.2,
    },
    "Aptos": {
        "gas_per_tx": 0.05,
        "bridge_fee": 4,
        "slippage_rate": 0.004,
        "withdrawal_fee": 0.1,
    },
    "Base": {
        "gas_per_tx": 0.8,
        "bridge_fee": 2,
        "slippage_rate": 0.002,
        "withdrawal_fee": 1.5,
    },
    "Arbitrum": {
        "gas_per_tx": 1.2,
        "bridge_fee": 5,
        "slippage_rate": 0.002,
        "withdrawal_fee": 2,
    },
    "Polygon": {
        "gas_per_tx": 0.3,
        "bridge_fee": 3,
        "slippage_rate": 0.003,
        "withdrawal_fee": 0.5,
    },
}

# =============================================================================
# PROTOCOL FEES (fractions)
# =============================================================================

PROTOCOL_FEES = {
    "Aave": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Compound": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Uniswap V3": {
        "deposit_fee_rate": 0.003,  # 0.3% swap fee
        "withdrawal_fee_rate": 0.003,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Curve": {
        "deposit_fee_rate": 0.0004,  # 0.04% swap fee
        "withdrawal_fee_rate": 0.0004,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Convex": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0.17,  # 17% of profit
        "management_fee_rate": 0,
    },
    "Yearn": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0.2,
        "management_fee_rate": 0.02,  # 2% per year on principal
    },
    "Raydium": {
        "deposit_fee_rate": 0.0025,
        "withdrawal_fee_rate": 0.0025,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Orca": {
        "deposit_fee_rate": 0.003,
        "withdrawal_fee_rate": 0.003,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "PancakeSwap": {
        "deposit_fee_rate": 0.0025,
        "withdrawal_fee_rate": 0.0025,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Venus": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Trader Joe": {
        "deposit_fee_rate": 0.003,
        "withdrawal_fee_rate": 0.003,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
    "Benqi": {
        "deposit_fee_rate": 0,
        "withdrawal_fee_rate": 0,
        "performance_fee_rate": 0,
        "management_fee_rate": 0,
    },
}
