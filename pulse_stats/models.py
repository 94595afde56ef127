"""Data models for pulse-stats."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class StatisticsRecord(BaseModel):
    """
    Aggregated activity statistics for the target project.

    Every field is optional and is only set when its source responded
    successfully; a missing value is serialized as null.
    """

    model_config = ConfigDict(frozen=True)

    range_label: Optional[str] = None
    new_issues_last_month: Optional[int] = None
    closed_issues_last_month: Optional[int] = None
    opened_pull_requests_last_month: Optional[int] = None
    merged_pull_requests_last_month: Optional[int] = None
    contributors_last_month: Optional[int] = None
    total_starcount: Optional[int] = None
    total_pull_requests: Optional[int] = None
    total_issues: Optional[int] = None
    total_contributors: Optional[int] = None

    def populated_fields(self) -> List[str]:
        """Names of the fields that hold a value."""
        return [name for name, value in self if value is not None]


# Report labels, in table order
FIELD_LABELS: Dict[str, str] = {
    "range_label": "Period",
    "new_issues_last_month": "New Issues Last Month",
    "closed_issues_last_month": "Closed Issues Last Month",
    "opened_pull_requests_last_month": "Opened Pull Requests Last Month",
    "merged_pull_requests_last_month": "Merged Pull Requests Last Month",
    "contributors_last_month": "Contributors Last Month",
    "total_starcount": "Total Star Count",
    "total_pull_requests": "Total Pull Requests",
    "total_issues": "Total Issues",
    "total_contributors": "Total Contributors",
}
