"""Bearer token payloads exchanged with report clients."""

from pydantic import BaseModel
from typing import Optional


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    # JWT "sub" claim: the operator's username
    sub: Optional[str] = None
