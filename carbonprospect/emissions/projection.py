"""Five-year emissions projection under a linear reduction assumption."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from carbonprospect.emissions.numbers import safe_number

#: Number of points in every projection, starting at the current year.
#: The formula has no floor at zero; extending the horizon needs one.
PROJECTION_YEARS = 5


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    emissions: float
    target: float


def project_five_years(
    current_total: float,
    total_reduction_percentage: float,
    target_reduction_fraction: float,
    current_year: int,
) -> list[ProjectionPoint]:
    """Project emissions and the target pathway for five consecutive years.

    The total achievable reduction is spread evenly over five years, so year
    *i* emits ``current_total * (1 - rate * i)`` with ``rate`` equal to
    ``total_reduction_percentage / 100 / 5``.  The target pathway reaches
    ``current_total * (1 - target_reduction_fraction)`` in the last year.

    The first point always carries ``current_total`` unchanged.
    """
    current_total = safe_number(current_total)
    annual_rate = safe_number(total_reduction_percentage) / 100 / PROJECTION_YEARS
    target_fraction = safe_number(target_reduction_fraction)
    last = PROJECTION_YEARS - 1

    points = []
    for i in range(PROJECTION_YEARS):
        emissions = current_total if i == 0 else current_total * (1 - annual_rate * i)
        points.append(
            ProjectionPoint(
                year=current_year + i,
                emissions=emissions,
                target=current_total * (1 - target_fraction * (i / last)),
            )
        )
    return points
