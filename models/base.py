"""
Base record classes.
"""

from pydantic import BaseModel, ConfigDict


class BaseRecord(BaseModel):
    """
    Base for all domain records.

    Validation happens at construction and on assignment, so a record that
    exists is a record that passed the boundary checks.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",  # Feed payloads carry plenty we don't use
        str_strip_whitespace=True,
    )
