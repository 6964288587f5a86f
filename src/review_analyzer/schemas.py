from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SentimentResult(BaseModel):
    """Top entry of a text-classification response."""

    label: str
    score: float = Field(..., ge=0.0, le=1.0)


class PosToken(BaseModel):
    """One entity group from a token-classification response."""

    model_config = ConfigDict(extra="allow")

    entity_group: Optional[str] = None


class AnalyzeRequest(BaseModel):
    """Body of the analysis endpoints.

    The token lives in the page and is passed through on every call; it is
    never stored on the server.
    """

    api_token: Optional[str] = Field(None, description="Optional Hugging Face API token")

    @field_validator("api_token")
    @classmethod
    def _blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
