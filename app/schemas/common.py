"""
app/schemas/common.py

Shared pydantic base for API payloads.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Payload model serialised with camelCase keys.

    Accepts either snake_case or camelCase on input.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
