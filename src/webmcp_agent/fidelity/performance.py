from typing import Dict, List

from pydantic import BaseModel, ConfigDict

TIME_PERIODS = ["YTD", "1 Year", "3 Year", "5 Year"]


class PerformanceSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    labels: List[str]
    values: List[float]
    total_return: str
    portfolio_value: str


PERFORMANCE_DATA: Dict[str, PerformanceSeries] = {
    "YTD": PerformanceSeries(
        labels=["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
        values=[8.2, 12.5, 9.8, 15.3, 11.7, 12.5],
        total_return="+12.5%",
        portfolio_value="$355,231",
    ),
    "1 Year": PerformanceSeries(
        labels=["Q1", "Q2", "Q3", "Q4"],
        values=[15.5, 18.2, 22.1, 19.8],
        total_return="+19.8%",
        portfolio_value="$355,231",
    ),
    "3 Year": PerformanceSeries(
        labels=["2022", "2023", "2024"],
        values=[35.2, 42.1, 48.5],
        total_return="+48.5%",
        portfolio_value="$355,231",
    ),
    "5 Year": PerformanceSeries(
        labels=["2020", "2021", "2022", "2023", "2024"],
        values=[22.3, 28.7, 35.2, 42.1, 48.5],
        total_return="+48.5%",
        portfolio_value="$355,231",
    ),
}


def performance_for(period: str) -> PerformanceSeries:
    """Return the series for ``period``, falling back to year-to-date."""
    return PERFORMANCE_DATA.get(period, PERFORMANCE_DATA["YTD"])
