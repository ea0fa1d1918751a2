# ============================================================================
# FILE: habithub/schemas/upload.py
# ============================================================================
from pydantic import BaseModel

class UploadData(BaseModel):
    filename: str
    media_type: str
    filesize: int

class UploadResult(BaseModel):
    message: str
    data: UploadData
