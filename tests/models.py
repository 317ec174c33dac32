"""Database models for pageql tests (shared)."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for test models."""
    pass


class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    posts = relationship("Post", back_populates="author", order_by="Post.id")
    post_comments = relationship("PostComment", back_populates="author")

    def __repr__(self):
        return f"<User {self.id} {self.name!r}>"


class PostStatus(enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Post(Base):
    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    content = Column(String(5000))
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    status = Column(SAEnum(PostStatus, name='post_status'), nullable=False, default=PostStatus.DRAFT)
    created_at = Column(DateTime, default=_utcnow)

    author = relationship("User", back_populates="posts")
    post_comments = relationship("PostComment", back_populates="post", order_by="PostComment.id")

    def __repr__(self):
        return f"<Post {self.id} {self.title!r}>"


class PostComment(Base):
    __tablename__ = 'post_comments'

    id = Column(Integer, primary_key=True)
    content = Column(String(1000), nullable=False)
    rate = Column(Integer, nullable=False, default=0)
    post_id = Column(Integer, ForeignKey('posts.id'), nullable=False)
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False)

    post = relationship("Post", back_populates="post_comments")
    author = relationship("User", back_populates="post_comments")
