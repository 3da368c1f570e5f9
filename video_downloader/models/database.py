from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    videos = relationship(
        "SavedVideo",
        back_populates="user",
        order_by="SavedVideo.id",
        cascade="all, delete-orphan",
    )

class SavedVideo(Base):
    __tablename__ = "saved_videos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    url = Column(String(2048))
    title = Column(String(512))
    thumbnail = Column(String(2048))
    platform = Column(String(32))
    quality = Column(String(32))
    format = Column(String(16))
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="videos")
