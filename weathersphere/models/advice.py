"""Recommendation data models."""

from pydantic import BaseModel, Field


class Advice(BaseModel):
    """A single piece of advice with short tags for display."""

    title: str
    text: str
    tags: list[str] = Field(default_factory=list)
    icon: str = ""


class Recommendations(BaseModel):
    """Advice derived from current conditions."""

    clothing: Advice
    activity: Advice
    health: Advice

    def as_list(self) -> list[Advice]:
        return [self.clothing, self.activity, self.health]
