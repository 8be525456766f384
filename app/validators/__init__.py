"""
app/validators package marker.
"""

from app.validators.import_row_validator import ImportRowValidator, parse_amount, parse_timestamp
from app.validators.mapping_validator import ColumnMappingError, MappingErrorDetail, MappingValidator

__all__ = [
    "ColumnMappingError",
    "ImportRowValidator",
    "MappingErrorDetail",
    "MappingValidator",
    "parse_amount",
    "parse_timestamp",
]
