from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    # untyped on purpose: absent fields are None and checks happen in the handler
    model_config = ConfigDict(extra="ignore")

    username: Any = None
    password: Any = None


class TokenResponse(BaseModel):
    error: Optional[str] = None
    token: str
