from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
from sqlalchemy.orm import Session
from apiforge.tasks.celery_app import celery_app
from apiforge.db.session import SessionLocal
from apiforge.db.repository import ProjectStore
from apiforge.core.config import settings
from apiforge.export.packager import archive_name, build_archive

log = logging.getLogger(__name__)


@celery_app.task(name="export_project_archive")
def export_project_archive(project_id: int) -> Optional[str]:
    """Write the zip archive of a project's stored files to the exports directory."""
    db: Session = SessionLocal()
    try:
        store = ProjectStore(db)
        project = store.get_project(project_id)
        if not project:
            log.error("Project not found", extra={"project_id": project_id, "stage": "export"})
            return None

        files = store.files_as_mapping(project_id)
        out_dir = Path(settings.exports_dir) / str(project_id)
        out_dir.mkdir(parents=True, exist_ok=True)
        target = out_dir / archive_name(project.name)
        target.write_bytes(build_archive(files))

        log.info("Exported %d files to %s", len(files), target, extra={"project_id": project_id, "stage": "export"})
        return str(target)
    except Exception:
        log.exception("Export failed", extra={"project_id": project_id, "stage": "export"})
        raise
    finally:
        db.close()
