from pydantic import BaseModel, ConfigDict, Field


class PhotoRecord(BaseModel):
    id: str
    key: str
    url: str
    name: str
    uploaded_at: str = Field(alias="uploadedAt")

    model_config = ConfigDict(populate_by_name=True)
