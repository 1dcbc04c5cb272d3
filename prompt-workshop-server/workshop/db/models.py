"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from workshop.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    color = Column(String(20), nullable=False, default="#3B82F6")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    prompt_templates = relationship("PromptTemplate", back_populates="category")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=False, default="")
    color = Column(String(20), nullable=False, default="#3B82F6")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class PromptTemplate(Base):
    __tablename__ = "prompt_templates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    yaml_template = Column(Text, nullable=False, default="")
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    tag_ids = Column(Text, nullable=False, default="[]")
    variables = Column(Text, nullable=False, default="[]")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("Category", back_populates="prompt_templates")
    executions = relationship(
        "PromptExecution",
        back_populates="prompt_template",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PromptExecution(Base):
    __tablename__ = "prompt_executions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    prompt_template_id = Column(
        String(36),
        ForeignKey("prompt_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    variables = Column(Text, nullable=False, default="{}")
    result = Column(Text, nullable=False, default="")
    status = Column(String(30), nullable=False, default="succeeded")
    attempts = Column(Integer, nullable=False, default=0)
    executed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    prompt_template = relationship("PromptTemplate", back_populates="executions")
