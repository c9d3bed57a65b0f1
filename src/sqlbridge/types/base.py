"""Base model class for all sqlbridge value types."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class BridgeBaseModel(BaseModel):
    """Base model for immutable sqlbridge values.

    Values produced by discovery and resolution steps are built once and
    never modified afterwards, so every model is frozen.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization."""
        return self.model_dump(by_alias=True)
