from typing import Literal

from pydantic import BaseModel, Field


class TotpAuthIn(BaseModel):
    key: str = Field(
        ..., description="Public uuid or API key of the user", max_length=255
    )
    key_type: Literal["public_uuid", "api_key"] = Field(
        "public_uuid", description="Which identifier `key` is"
    )
    code: int = Field(..., description="Current one-time code", ge=0)
