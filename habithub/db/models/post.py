# ============================================================================
# FILE: habithub/db/models/post.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from habithub.db.base import Base

class Post(Base):
    """Post referencing a media file held by the upload service"""
    __tablename__ = "posts"

    post_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    post_title = Column(String(255), nullable=False)
    post_text = Column(Text, nullable=True)
    filename = Column(String(255), nullable=False)  # storage key on the upload service
    filesize = Column(Integer, nullable=False, default=0)
    media_type = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", lazy="joined")

class Comment(Base):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    comment_text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", lazy="joined")

class Like(Base):
    """At most one like per (user, post); the constraint backs up the service-level check"""
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),)

    like_id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
