from typing import Literal

from pydantic import BaseModel


class AuthAcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"
