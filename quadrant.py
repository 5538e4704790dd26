"""
Risk/Reward Quadrant Classification.

Normalizes a batch of opportunities by the batch's max yield and max risk,
then buckets each into one of four quadrants:

    | normalized risk | normalized yield | quadrant   |
    |-----------------|------------------|------------|
    | <= 0.5          | >= 0.5           | sweet-spot |
    | >  0.5          | >= 0.5           | high-risk  |
    | <= 0.5          | <  0.5           | safe-haven |
    | >  0.5          | <  0.5           | avoid      |

Normalization is relative to the batch, so the same opportunity can land in
different quadrants depending on what it is classified alongside.
"""

from dataclasses import dataclass
from typing import Dict, Any, Iterable, List, Sequence

import numpy as np
import pandas as pd

try:
    from .opportunities import OpportunityRecord
    from .risk_tables import QUADRANTS, QUADRANT_THRESHOLD
except ImportError:
    from opportunities import OpportunityRecord
    from risk_tables import QUADRANTS, QUADRANT_THRESHOLD


@dataclass(frozen=True)
class QuadrantAssignment:
    opportunity: OpportunityRecord
    normalized_yield: float
    normalized_risk: float
    quadrant: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.opportunity.to_dict(),
            "normalized_yield": self.normalized_yield,
            "normalized_risk": self.normalized_risk,
            "quadrant": self.quadrant,
        }


def quadrant_for(normalized_risk: float, normalized_yield: float) -> str:
    """Quadrant for a normalized (risk, yield) point. 0.5 counts as low risk and high yield."""
    low_risk = normalized_risk <= QUADRANT_THRESHOLD
    high_yield = normalized_yield >= QUADRANT_THRESHOLD

    if high_yield:
        return "sweet-spot" if low_risk else "high-risk"
    return "safe-haven" if low_risk else "avoid"


def opportunity_yield(record: OpportunityRecord, use_net_yield: bool = True) -> float:
    """
    Yield axis value: net APY when requested and available, gross APY otherwise.

    Only a missing net APY (None) falls back to gross. A computed net APY of 0
    means fees ate the whole yield and is plotted as 0, not swapped for gross
    the way a truthiness check would.
    """
    if use_net_yield and record.net_apy is not None:
        return record.net_apy
    return record.gross_apy


def _normalize(values: np.ndarray) -> np.ndarray:
    # All-zero axis divides by 1 so every point normalizes to 0
    peak = values.max()
    return values / (peak if peak > 0 else 1.0)


def classify(records: Iterable[OpportunityRecord], use_net_yield: bool = True) -> List[QuadrantAssignment]:
    """
    Classify a batch of opportunities into risk/reward quadrants.

    Args:
        records: The complete batch to normalize against (any iterable, read once)
        use_net_yield: Classify on net APY (default) or gross APY

    Returns:
        One QuadrantAssignment per record, in input order
    """
    records = list(records)
    if not records:
        return []

    yields = np.array([opportunity_yield(r, use_net_yield) for r in records], dtype=float)
    risks = np.array([r.risk_score for r in records], dtype=float)

    normalized_yields = _normalize(yields)
    normalized_risks = _normalize(risks)

    return [
        QuadrantAssignment(
            opportunity=record,
            normalized_yield=norm_yield,
            normalized_risk=norm_risk,
            quadrant=quadrant_for(norm_risk, norm_yield),
        )
        for record, norm_yield, norm_risk in zip(
            records, normalized_yields.tolist(), normalized_risks.tolist()
        )
    ]


# =============================================================================
# TABULAR OUTPUT
# =============================================================================

FRAME_COLUMNS = [
    "protocol", "chain", "category", "token", "tvl",
    "gross_apy", "net_apy", "fee_impact_percent", "risk_score",
    "normalized_yield", "normalized_risk", "quadrant",
]


def assignments_to_frame(assignments: Sequence[QuadrantAssignment]) -> pd.DataFrame:
    """One row per assignment, input order preserved."""
    return pd.DataFrame([a.to_dict() for a in assignments], columns=FRAME_COLUMNS)


def summarize_quadrants(assignments: Sequence[QuadrantAssignment], use_net_yield: bool = True) -> pd.DataFrame:
    """
    Per-quadrant count, mean yield and mean risk score.

    All four quadrants are always present (count 0, NaN means when empty),
    indexed by quadrant key in QUADRANTS order.
    """
    frame = pd.DataFrame(
        {
            "quadrant": [a.quadrant for a in assignments],
            "yield": [opportunity_yield(a.opportunity, use_net_yield) for a in assignments],
            "risk_score": [a.opportunity.risk_score for a in assignments],
        },
        columns=["quadrant", "yield", "risk_score"],
    )
    frame["yield"] = frame["yield"].astype(float)
    frame["risk_score"] = frame["risk_score"].astype(float)

    summary = frame.groupby("quadrant").agg(
        count=("risk_score", "size"),
        mean_yield=("yield", "mean"),
        mean_risk_score=("risk_score", "mean"),
    )
    summary = summary.reindex(list(QUADRANTS))
    summary["count"] = summary["count"].fillna(0).astype(int)
    summary.insert(0, "label", [QUADRANTS[q]["label"] for q in summary.index])
    summary.index.name = "quadrant"
    return summary
