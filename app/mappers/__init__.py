"""
app/mappers package marker.
"""

from app.mappers.donor_column_mapper import (
    IMPORT_FIELDS,
    REQUIRED_IMPORT_FIELDS,
    ColumnResolution,
    DonorColumnMapper,
)

__all__ = [
    "IMPORT_FIELDS",
    "REQUIRED_IMPORT_FIELDS",
    "ColumnResolution",
    "DonorColumnMapper",
]
