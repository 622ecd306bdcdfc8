"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import ClassVar
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    # Column holding the owning principal; None for tables without row ownership
    __owner_column__: ClassVar[str | None] = None


class ProfileModel(Base):
    """User profile model (one row per auth principal)."""

    __tablename__ = "profiles"
    __owner_column__ = "id"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Dependents are removed by ON DELETE CASCADE, never by the ORM
    posts: Mapped[list["PostModel"]] = relationship(
        "PostModel",
        back_populates="author",
        passive_deletes="all",
    )
    likes: Mapped[list["LikeModel"]] = relationship(
        "LikeModel",
        back_populates="user",
        passive_deletes="all",
    )
    comments: Mapped[list["CommentModel"]] = relationship(
        "CommentModel",
        back_populates="author",
        passive_deletes="all",
    )


class PostModel(Base):
    """Post model."""

    __tablename__ = "posts"
    __owner_column__ = "user_id"
    __table_args__ = (Index("ix_posts_created_at_id", "created_at", "id"),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    author: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="posts")
    likes: Mapped[list["LikeModel"]] = relationship(
        "LikeModel",
        back_populates="post",
        passive_deletes="all",
    )
    comments: Mapped[list["CommentModel"]] = relationship(
        "CommentModel",
        back_populates="post",
        passive_deletes="all",
    )


class LikeModel(Base):
    """Like model (unique per user and post)."""

    __tablename__ = "likes"
    __owner_column__ = "user_id"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    user: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="likes")
    post: Mapped["PostModel"] = relationship("PostModel", back_populates="likes")


class CommentModel(Base):
    """Comment model."""

    __tablename__ = "comments"
    __owner_column__ = "user_id"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    author: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="comments")
    post: Mapped["PostModel"] = relationship("PostModel", back_populates="comments")
