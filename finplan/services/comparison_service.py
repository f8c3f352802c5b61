import logging
from typing import Dict, List, Sequence

from finplan.core.config import settings
from finplan.models.projection import NetWorthComparisonRow, ProjectionComparison, StoredProjection

logger = logging.getLogger(__name__)


class ComparisonService:
    """
    Lines up stored projections side by side for the reports view.
    """
    @staticmethod
    def compare_projections(stored_projections: Sequence[StoredProjection]) -> ProjectionComparison:
        """
        Orders projections most recent first and builds a net-worth-by-year table.

        A projection that skipped a year simply has no value in that row.

        Raises:
            ValueError: No projections, or more than MAX_COMPARE_PROJECTIONS.
        """
        if not stored_projections:
            raise ValueError("At least one projection is required")

        if len(stored_projections) > settings.MAX_COMPARE_PROJECTIONS:
            raise ValueError(f"Maximum of {settings.MAX_COMPARE_PROJECTIONS} projections can be compared at once")

        ordered = sorted(stored_projections, key=lambda p: p.calculatedAt, reverse=True)

        rows: Dict[int, Dict[str, float]] = {}
        for stored in ordered:
            for annual in stored.projection.years:
                rows.setdefault(annual.year, {})[str(stored.id)] = annual.accountBalances.total

        net_worth_by_year: List[NetWorthComparisonRow] = [
            NetWorthComparisonRow(year=year, values=rows[year]) for year in sorted(rows)
        ]

        best = max(ordered, key=lambda p: p.projection.summary.finalNetWorth)

        logger.info(f"Compared {len(ordered)} projections over {len(net_worth_by_year)} years")

        return ProjectionComparison(
            storedProjections=ordered,
            netWorthByYear=net_worth_by_year,
            bestProjectionId=best.id
        )
