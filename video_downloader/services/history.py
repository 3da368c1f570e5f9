import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from video_downloader.core.exceptions import PersistenceFailed
from video_downloader.models.database import SavedVideo, User
from video_downloader.models.request import SaveVideoRequest

logger = logging.getLogger(__name__)


class HistoryStore:
    """Per-account history of resolved videos"""

    def __init__(self, db: Session):
        self.db = db

    def find_user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise PersistenceFailed(str(e))

    def list_videos(self, user_id: int) -> List[SavedVideo]:
        try:
            return (
                self.db.query(SavedVideo)
                .filter(SavedVideo.user_id == user_id)
                .order_by(SavedVideo.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise PersistenceFailed(str(e))

    def add_video(self, user_id: int, fields: SaveVideoRequest) -> SavedVideo:
        video = SavedVideo(user_id=user_id, **fields.model_dump())
        try:
            self.db.add(video)
            self.db.commit()
            self.db.refresh(video)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save video for user {user_id}: {str(e)}")
            raise PersistenceFailed(str(e), message="Failed to save video")
        return video

    def remove_video(self, user_id: int, video_id: str) -> bool:
        """Delete a saved video owned by user_id. Unknown or malformed ids are not an error."""
        try:
            pk = int(video_id)
        except (TypeError, ValueError):
            return False

        try:
            deleted = (
                self.db.query(SavedVideo)
                .filter(SavedVideo.user_id == user_id, SavedVideo.id == pk)
                .delete()
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete video {video_id} for user {user_id}: {str(e)}")
            raise PersistenceFailed(str(e), message="Failed to delete video")
        return bool(deleted)
