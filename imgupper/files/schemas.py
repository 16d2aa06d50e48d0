from datetime import datetime

from pydantic import BaseModel


class FileResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    user_id: int
    filename: str
    filesize: int
    mime_type: str
    bucket_url: str
    created_at: datetime
    updated_at: datetime
