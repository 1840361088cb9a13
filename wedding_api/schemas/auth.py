from pydantic import BaseModel, ConfigDict, Field


class AdminSessionResponse(BaseModel):
    ok: bool = True
    token: str
    expires_at: str = Field(alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True)
