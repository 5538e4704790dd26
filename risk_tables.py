"""
Protocol Risk Reference Data.

Static inputs for the risk scoring model:
- Factor weights (must sum to 1.0) with the reasoning behind each factor
- Per-protocol factor ratings on a 0-10 scale (0 = safest, 10 = riskiest)
- Risk level scale used to label composite scores
- Quadrant definitions used by the risk/reward classifier

Tables here are plain dicts; config_schema converts them into immutable
configuration objects before any scoring happens.
"""

# =============================================================================
# RISK FACTORS
# =============================================================================

RISK_FACTORS = {
    "exploit_history": {
        "weight": 0.25,
        "description": "Historical security incidents and exploits",
        "scale": "0 = no exploits, 10 = multiple major exploits",
    },
    "oracle_dependency": {
        "weight": 0.20,
        "description": "Reliance on external price oracles",
        "scale": "0 = no oracle risk, 10 = high oracle risk",
    },
    "tvl_concentration": {
        "weight": 0.15,
        "description": "Concentration of total value locked",
        "scale": "0 = well distributed, 10 = highly concentrated",
    },
    "code_audit": {
        "weight": 0.15,
        "description": "Code audit quality and coverage",
        "scale": "0 = multiple audits, 10 = no audits",
    },
    "time_in_market": {
        "weight": 0.10,
        "description": "Protocol maturity and track record",
        "scale": "0 = more than 3 years, 10 = less than 6 months",
    },
    "governance_risk": {
        "weight": 0.10,
        "description": "Decentralization and governance structure",
        "scale": "0 = fully decentralized, 10 = centralized",
    },
    "liquidity_risk": {
        "weight": 0.05,
        "description": "Market liquidity and depth",
        "scale": "0 = deep liquidity, 10 = shallow liquidity",
    },
}

# Canonical factor order, used for breakdowns and serialisation
RISK_FACTOR_NAMES = tuple(RISK_FACTORS)

RISK_FACTOR_DESCRIPTIONS = {
    name: factor["description"] for name, factor in RISK_FACTORS.items()
}

# =============================================================================
# PROTOCOL RATINGS
# =============================================================================

PROTOCOL_RISK_RATINGS = {
    "Aave": {
        "exploit_history": 1,
        "oracle_dependency": 2,
        "tvl_concentration": 2,
        "code_audit": 1,
        "time_in_market": 1,
        "governance_risk": 3,
        "liquidity_risk": 2,
    },
    "Compound": {
        "exploit_history": 2,
        "oracle_dependency": 3,
        "tvl_concentration": 3,
        "code_audit": 1,
        "time_in_market": 1,
        "governance_risk": 2,
        "liquidity_risk": 2,
    },
    "Uniswap V3": {
        "exploit_history": 1,
        "oracle_dependency": 4,
        "tvl_concentration": 2,
        "code_audit": 1,
        "time_in_market": 2,
        "governance_risk": 3,
        "liquidity_risk": 1,
    },
    "Curve": {
        "exploit_history": 3,
        "oracle_dependency": 5,
        "tvl_concentration": 4,
        "code_audit": 2,
        "time_in_market": 1,
        "governance_risk": 4,
        "liquidity_risk": 3,
    },
    "Convex": {
        "exploit_history": 2,
        "oracle_dependency": 6,
        "tvl_concentration": 5,
        "code_audit": 3,
        "time_in_market": 3,
        "governance_risk": 5,
        "liquidity_risk": 4,
    },
    "Yearn": {
        "exploit_history": 4,
        "oracle_dependency": 6,
        "tvl_concentration": 6,
        "code_audit": 2,
        "time_in_market": 2,
        "governance_risk": 4,
        "liquidity_risk": 5,
    },
    "Raydium": {
        "exploit_history": 2,
        "oracle_dependency": 4,
        "tvl_concentration": 5,
        "code_audit": 4,
        "time_in_market": 4,
        "governance_risk": 6,
        "liquidity_risk": 3,
    },
    "Orca": {
        "exploit_history": 1,
        "oracle_dependency": 3,
        "tvl_concentration": 4,
        "code_audit": 3,
        "time_in_market": 4,
        "governance_risk": 5,
        "liquidity_risk": 3,
    },
    "PancakeSwap": {
        "exploit_history": 3,
        "oracle_dependency": 5,
        "tvl_concentration": 6,
        "code_audit": 4,
        "time_in_market": 3,
        "governance_risk": 6,
        "liquidity_risk": 4,
    },
    "Venus": {
        "exploit_history": 5,
        "oracle_dependency": 7,
        "tvl_concentration": 7,
        "code_audit": 5,
        "time_in_market": 3,
        "governance_risk": 7,
        "liquidity_risk": 6,
    },
    "Trader Joe": {
        "exploit_history": 2,
        "oracle_dependency": 4,
        "tvl_concentration": 5,
        "code_audit": 3,
        "time_in_market": 4,
        "governance_risk": 5,
        "liquidity_risk": 4,
    },
    "Benqi": {
        "exploit_history": 1,
        "oracle_dependency": 3,
        "tvl_concentration": 4,
        "code_audit": 3,
        "time_in_market": 4,
        "governance_risk": 4,
        "liquidity_risk": 3,
    },
}

# =============================================================================
# RISK LEVEL SCALE
# =============================================================================

RISK_LEVELS = {
    "Low": {
        "min": 0,
        "max": 30,
        "description": "Established protocol with strong audits and proven stability.",
    },
    "Medium": {
        "min": 31,
        "max": 60,
        "description": "Reasonable security track record with some elevated factors.",
    },
    "High": {
        "min": 61,
        "max": 100,
        "description": "Elevated exploit, oracle or governance risk. Limit exposure.",
    },
}

# =============================================================================
# QUADRANTS
# =============================================================================

# Axis split on normalized values. Yield >= 0.5 counts as high yield,
# risk <= 0.5 counts as low risk.
QUADRANT_THRESHOLD = 0.5

QUADRANTS = {
    "sweet-spot": {
        "label": "Sweet Spot",
        "risk": "low",
        "yield": "high",
        "description": "High yield with relatively low risk",
    },
    "high-risk": {
        "label": "High Risk",
        "risk": "high",
        "yield": "high",
        "description": "Maximum rewards but significant risk",
    },
    "safe-haven": {
        "label": "Safe Haven",
        "risk": "low",
        "yield": "low",
        "description": "Lower yield with minimal risk",
    },
    "avoid": {
        "label": "Avoid Zone",
        "risk": "high",
        "yield": "low",
        "description": "Low yield that does not compensate for high risk",
    },
}
