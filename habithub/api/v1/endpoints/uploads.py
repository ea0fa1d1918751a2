# ============================================================================
# FILE: habithub/api/v1/endpoints/uploads.py
# ============================================================================
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from habithub.api.dependencies import get_upload_service, require_token_user
from habithub.core.outcomes import DeleteOutcome
from habithub.core.security import TokenClaims
from habithub.schemas.common import MessageResponse
from habithub.schemas.upload import UploadResult
from habithub.services.upload_service import UploadService

router = APIRouter()

@router.post("/upload", response_model=UploadResult)
async def upload_file(
    file: UploadFile = File(...),
    token_user: TokenClaims = Depends(require_token_user),
    uploads: UploadService = Depends(get_upload_service),
):
    """Store a media file; the answer is what the media app expects for a post"""
    data = uploads.save(file.file, file.filename, file.content_type, token_user.user_id)
    return {"message": "File uploaded", "data": data}

@router.delete("/delete/{filename}", response_model=MessageResponse)
async def delete_file(
    filename: str,
    token_user: TokenClaims = Depends(require_token_user),
    uploads: UploadService = Depends(get_upload_service),
):
    outcome = uploads.delete(filename, token_user.user_id)
    if outcome == DeleteOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="File not found")
    if outcome == DeleteOutcome.FORBIDDEN:
        raise HTTPException(status_code=403, detail="Not your file")
    return {"message": "File deleted"}
