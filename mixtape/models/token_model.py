# mixtape/models/token_model.py
from datetime import datetime
from pydantic import BaseModel, Field

# updatedAt is informational only; older documents hold a locale string
class ClientAccessToken(BaseModel):
    accessToken: str
    updatedAt: datetime | str | None = None

class ServerAccessToken(BaseModel):
    accessToken: str | None = None   # empty until the first refresh after seeding
    refreshToken: str = Field(min_length=1)
    updatedAt: datetime | str | None = None

class AccessTokenResponse(BaseModel):
    accessToken: str

class ErrorResponse(BaseModel):
    error: str
