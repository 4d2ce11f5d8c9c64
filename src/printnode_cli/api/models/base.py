"""Base model configuration for typed PrintNode sub-models."""

from pydantic import BaseModel, ConfigDict


class PrintNodeModel(BaseModel):
    """Base model with common configuration.

    Used for the small fixed-shape values nested inside resources:
    - populate_by_name: Allow both alias and field name in input
    - extra="ignore": Ignore unknown fields from API responses
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )
