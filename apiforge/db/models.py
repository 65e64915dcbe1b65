from __future__ import annotations
from datetime import datetime
from typing import List, Optional
from sqlalchemy import String, DateTime, Integer, JSON, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from apiforge.db.session import Base

class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    owner: Mapped[str] = mapped_column(String(200), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    config: Mapped[Optional[ProjectConfig]] = relationship(
        back_populates="project", cascade="all, delete-orphan", uselist=False
    )
    files: Mapped[List[GeneratedFile]] = relationship(
        back_populates="project", cascade="all, delete-orphan", order_by="GeneratedFile.id"
    )


class ProjectConfig(Base):
    __tablename__ = "project_configs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    backend_type: Mapped[str] = mapped_column(String(20), default="", nullable=False)
    backend_version: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    database_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    database_connection_string: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    features: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    # Set when the stored files match this configuration; cleared by any change
    generated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    project: Mapped[Project] = relationship(back_populates="config")


class GeneratedFile(Base):
    __tablename__ = "generated_files"
    __table_args__ = (UniqueConstraint("project_id", "file_path", name="uq_generated_files_project_path"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_content: Mapped[str] = mapped_column(Text, default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    project: Mapped[Project] = relationship(back_populates="files")
