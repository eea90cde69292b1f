"""Data models for podcast episodes."""

from pydantic import BaseModel, ConfigDict, Field


class EpisodeInfo(BaseModel):
    """A feed item whose title matched a series pattern."""

    model_config = ConfigDict(frozen=True)

    name: str  # Title exactly as it appears in the feed
    link: str  # Enclosure URL, empty if the item had none
    episode_number: int = Field(ge=0)
