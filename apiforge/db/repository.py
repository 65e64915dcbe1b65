"""Project store: CRUD access to projects, their configuration and generated files."""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from apiforge.core.catalog import STORE_DEFAULTS
from apiforge.core.config import settings
from apiforge.db.models import Project, ProjectConfig, GeneratedFile

log = logging.getLogger(__name__)

CONFIG_FIELDS = ("backend_type", "backend_version", "database_type", "database_connection_string", "features")
PROJECT_FIELDS = ("name", "description", "owner")


class ProjectStore:
    """Repository over the three persisted collections.

    Missing entities are reported as ``None`` / ``False`` rather than raised,
    callers decide whether "not found" is an error.
    """

    def __init__(self, db: Session):
        self.db = db

    # Projects

    def list_projects(self, owner: Optional[str] = None) -> List[Project]:
        stmt = select(Project).order_by(Project.id)
        if owner is not None:
            stmt = stmt.where(Project.owner == owner)
        return list(self.db.scalars(stmt))

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def create_project(self, name: str, description: Optional[str] = None, owner: Optional[str] = None) -> Project:
        project = Project(name=name, description=description, owner=owner or settings.default_owner)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        log.info("Created project %r", name, extra={"project_id": project.id, "stage": "store"})
        return project

    def update_project(self, project_id: int, data: Mapping[str, Any]) -> Optional[Project]:
        project = self.get_project(project_id)
        if not project:
            return None
        for key in PROJECT_FIELDS:
            if key in data:
                setattr(project, key, data[key])
        project.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete_project(self, project_id: int) -> bool:
        project = self.get_project(project_id)
        if not project:
            return False
        # ORM cascade removes the configuration and every generated file
        self.db.delete(project)
        self.db.commit()
        log.info("Deleted project", extra={"project_id": project_id, "stage": "store"})
        return True

    # Configurations

    def get_config(self, project_id: int) -> Optional[ProjectConfig]:
        return self.db.scalars(
            select(ProjectConfig).where(ProjectConfig.project_id == project_id)
        ).first()

    def save_config(self, project_id: int, data: Mapping[str, Any]) -> ProjectConfig:
        """Create or merge-update the configuration of a project.

        On creation, fields absent from ``data`` take the store defaults.
        """
        config = self.get_config(project_id)
        now = datetime.utcnow()
        if config is None:
            values = {key: data[key] if key in data else STORE_DEFAULTS[key] for key in CONFIG_FIELDS}
            values["features"] = dict(values["features"] or {})
            config = ProjectConfig(project_id=project_id, created_at=now, updated_at=now, **values)
            self.db.add(config)
        else:
            changed = False
            for key in CONFIG_FIELDS:
                if key in data:
                    value = dict(data[key] or {}) if key == "features" else data[key]
                    if getattr(config, key) != value:
                        changed = True
                    # JSON columns only track reassignment
                    setattr(config, key, value)
            if changed:
                config.generated_at = None
            config.updated_at = now
        self.db.commit()
        self.db.refresh(config)
        return config

    def mark_generated(self, project_id: int, generated: bool = True) -> Optional[ProjectConfig]:
        """Record whether the stored files reflect the saved configuration."""
        config = self.get_config(project_id)
        if config is None:
            return None
        config.generated_at = datetime.utcnow() if generated else None
        self.db.commit()
        self.db.refresh(config)
        return config

    def delete_config(self, project_id: int) -> bool:
        config = self.get_config(project_id)
        if not config:
            return False
        self.db.delete(config)
        self.db.commit()
        return True

    # Generated files

    def list_files(self, project_id: int) -> List[GeneratedFile]:
        return list(self.db.scalars(
            select(GeneratedFile).where(GeneratedFile.project_id == project_id).order_by(GeneratedFile.id)
        ))

    def files_as_mapping(self, project_id: int) -> Dict[str, str]:
        return {f.file_path: f.file_content for f in self.list_files(project_id)}

    def get_file(self, project_id: int, file_path: str) -> Optional[GeneratedFile]:
        return self.db.scalars(
            select(GeneratedFile).where(
                GeneratedFile.project_id == project_id,
                GeneratedFile.file_path == file_path,
            )
        ).first()

    def upsert_file(self, project_id: int, file_path: str, file_content: str) -> GeneratedFile:
        existing = self.get_file(project_id, file_path)
        now = datetime.utcnow()
        if existing:
            existing.file_content = file_content
            existing.updated_at = now
            record = existing
        else:
            record = GeneratedFile(
                project_id=project_id,
                file_path=file_path,
                file_content=file_content,
                created_at=now,
                updated_at=now,
            )
            self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_file_content(self, project_id: int, file_path: str, file_content: str) -> Optional[GeneratedFile]:
        existing = self.get_file(project_id, file_path)
        if not existing:
            return None
        return self.upsert_file(project_id, file_path, file_content)

    def delete_files(self, project_id: int) -> bool:
        result = self.db.execute(delete(GeneratedFile).where(GeneratedFile.project_id == project_id))
        self.db.commit()
        self.db.expire_all()
        return result.rowcount > 0

    def replace_files(self, project_id: int, files: Mapping[str, str]) -> List[GeneratedFile]:
        """Swap the full file set of a project in one transaction.

        Either every old file is gone and every new file is stored, or the
        previous set is left untouched.
        """
        now = datetime.utcnow()
        try:
            self.db.execute(delete(GeneratedFile).where(GeneratedFile.project_id == project_id))
            records = [
                GeneratedFile(
                    project_id=project_id,
                    file_path=path,
                    file_content=content,
                    created_at=now,
                    updated_at=now,
                )
                for path, content in files.items()
            ]
            self.db.add_all(records)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            log.exception("File replacement rolled back", extra={"project_id": project_id, "stage": "store"})
            raise
        self.db.expire_all()
        return self.list_files(project_id)
