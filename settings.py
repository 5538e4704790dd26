"""
Analytics configuration.

Caller-facing defaults, overridable through environment variables.
"""

import os

# Position defaults used when a caller leaves amount/period unspecified
DEFAULT_INVESTMENT_AMOUNT = float(os.getenv("DEFI_DEFAULT_INVESTMENT_AMOUNT", 10000))
DEFAULT_HOLDING_PERIOD_DAYS = float(os.getenv("DEFI_DEFAULT_HOLDING_PERIOD_DAYS", 365))

# Score assigned to protocols absent from the ratings table (medium-high risk)
UNKNOWN_PROTOCOL_RISK_SCORE = int(os.getenv("DEFI_UNKNOWN_PROTOCOL_RISK_SCORE", 65))

# Fallback rows for fee lookups
DEFAULT_CHAIN = os.getenv("DEFI_DEFAULT_CHAIN", "Ethereum")
DEFAULT_FEE_PROTOCOL = os.getenv("DEFI_DEFAULT_FEE_PROTOCOL", "Aave")

LOG_LEVEL = os.getenv("DEFI_LOG_LEVEL", "WARNING")
