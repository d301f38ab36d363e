"""Base Pydantic schema for the project.

Provides a common base class for all Pydantic models in toolchain-report
with shared configuration and validation behavior.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - str_strip_whitespace: Automatically strip whitespace from strings
    - frozen: Measurements are immutable once recorded
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
    )
