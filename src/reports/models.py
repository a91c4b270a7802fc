# src/reports/models.py — v1
"""Report models: FileListing, StatisticsSummary, FormatBreakdown.

Reports are derived views over an owner's stored files. They are never the
source of truth; the cache holds their JSON serialization.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, Field, computed_field

ReportType = Literal["listing", "statistics", "formats"]

REPORT_TYPES: tuple[ReportType, ...] = ("listing", "statistics", "formats")

_BYTES_PER_GB = 1024**3


class FileListingEntry(BaseModel):
    """One file in a listing."""

    id: str
    owner_id: str
    storage_path: str
    file_name: str
    content_type: str | None = None
    size_bytes: int | None = None
    upload_date: datetime | None = None


class FileListing(BaseModel):
    """All files of one owner, in enumeration order."""

    owner_id: str
    files: list[FileListingEntry] = Field(default_factory=list)


class StatisticsSummary(BaseModel):
    """File count and total stored bytes of one owner."""

    owner_id: str
    total_files: int = 0
    total_used_bytes: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def storage_used_gb(self) -> float:
        """Total usage in GiB, rounded to 2 decimals."""
        return round(self.total_used_bytes / _BYTES_PER_GB, 2)


class FormatBreakdown(BaseModel):
    """Number of files per format key."""

    owner_id: str
    formats: dict[str, int] = Field(default_factory=dict)

    def as_pairs(self) -> list[tuple[str, int]]:
        """Formats as (format, count) pairs, most frequent first."""
        return sorted(self.formats.items(), key=lambda kv: (-kv[1], kv[0]))


Report = Union[FileListing, StatisticsSummary, FormatBreakdown]

REPORT_MODELS: dict[str, type[BaseModel]] = {
    "listing": FileListing,
    "statistics": StatisticsSummary,
    "formats": FormatBreakdown,
}


def serialize_report(report: Report) -> bytes:
    return report.model_dump_json().encode("utf-8")


def deserialize_report(report_type: str, data: bytes) -> Report:
    """Rebuild a report model from cached bytes.

    Raises:
        KeyError: Unknown report type.
        pydantic.ValidationError: Bytes do not hold a valid report.
    """
    model = REPORT_MODELS[report_type]
    return model.model_validate_json(data)  # type: ignore[return-value]
