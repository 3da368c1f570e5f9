from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from video_downloader.core.auth import get_current_user
from video_downloader.infra.database import get_db
from video_downloader.models.database import User
from video_downloader.models.request import SaveVideoRequest
from video_downloader.models.response import (
    HistoryResponse,
    MessageResponse,
    SaveVideoResponse,
    SavedVideoOut,
)
from video_downloader.services.history import HistoryStore

router = APIRouter()

@router.get("/history", response_model=HistoryResponse)
def get_history(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get the caller's video history"""
    videos = HistoryStore(db).list_videos(user.id)
    return HistoryResponse(videos=[SavedVideoOut.model_validate(v) for v in videos])

@router.post("/save", response_model=SaveVideoResponse)
def save_video(
    video_request: SaveVideoRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Append a video to the caller's history"""
    video = HistoryStore(db).add_video(user.id, video_request)
    return SaveVideoResponse(
        message="Video saved successfully",
        video=SavedVideoOut.model_validate(video),
    )

@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(video_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Remove a video from the caller's history"""
    HistoryStore(db).remove_video(user.id, video_id)
    return MessageResponse(message="Video deleted successfully")
