import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from apiforge.db.session import get_db
from apiforge.db.repository import ProjectStore
from apiforge.core.engine import ProjectSession
from apiforge.core.errors import (
    GeneratorError,
    InvalidConfigurationError,
    ProjectNotFoundError,
    UnsavedChangesError,
    UnsupportedBackendError,
)
from apiforge.schemas.projects import (
    ConfigResponse,
    ConfigUpdateRequest,
    ExportJobResponse,
    FileSummary,
    GenerationResponse,
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
)
from apiforge.tasks.exports import export_project_archive

log = logging.getLogger(__name__)

router = APIRouter(prefix="/projects")


def load_session(db: Session, project_id: int) -> ProjectSession:
    try:
        return ProjectSession.load(ProjectStore(db), project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")


def run_generation(session: ProjectSession, action):
    """Run a generation-backed action, mapping domain errors to HTTP errors."""
    try:
        return action()
    except UnsavedChangesError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (InvalidConfigurationError, UnsupportedBackendError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GeneratorError as e:
        log.error("Generation failed: %s", e, extra={"project_id": session.project_id, "stage": "generate"})
        raise HTTPException(status_code=500, detail=str(e))


def config_response(session: ProjectSession) -> ConfigResponse:
    config = session.config
    return ConfigResponse(
        project_id=session.project_id,
        backend_type=config.get("backend_type") or "",
        backend_version=config.get("backend_version") or "",
        database_type=config.get("database_type"),
        database_connection_string=config.get("database_connection_string"),
        features=config.get("features") or {},
        state=session.state,
    )


@router.post("", response_model=ProjectResponse)
def create_project(req: ProjectCreateRequest, db: Session = Depends(get_db)):
    return ProjectStore(db).create_project(req.name, req.description, req.owner)


@router.get("", response_model=List[ProjectResponse])
def list_projects(owner: Optional[str] = None, db: Session = Depends(get_db)):
    return ProjectStore(db).list_projects(owner)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, db: Session = Depends(get_db)):
    project = ProjectStore(db).get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: int, req: ProjectUpdateRequest, db: Session = Depends(get_db)):
    project = ProjectStore(db).update_project(project_id, req.model_dump(exclude_unset=True))
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: int, db: Session = Depends(get_db)):
    if not ProjectStore(db).delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=204)


@router.get("/{project_id}/config", response_model=ConfigResponse)
def get_config(project_id: int, db: Session = Depends(get_db)):
    return config_response(load_session(db, project_id))


@router.put("/{project_id}/config", response_model=ConfigResponse)
def save_config(project_id: int, req: ConfigUpdateRequest, db: Session = Depends(get_db)):
    session = load_session(db, project_id)
    data = req.model_dump(exclude_unset=True)
    name = data.pop("name", None)
    description = data.pop("description", None)
    if data:
        session.apply_changes(**data)
    session.save_config(name=name, description=description)
    return config_response(session)


@router.post("/{project_id}/generate", response_model=GenerationResponse)
def generate(project_id: int, db: Session = Depends(get_db)):
    session = load_session(db, project_id)
    result = run_generation(session, session.generate_code)
    return GenerationResponse(
        project_id=result.project_id,
        backend_type=result.backend_type,
        state=result.state,
        selected_file=result.selected_file,
        files=[FileSummary(file_path=path, size=len(content)) for path, content in result.files.items()],
    )


@router.get("/{project_id}/export")
def export_project(project_id: int, db: Session = Depends(get_db)):
    session = load_session(db, project_id)
    name, data = run_generation(session, session.export)
    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


@router.post("/{project_id}/exports", response_model=ExportJobResponse)
def enqueue_export(project_id: int, db: Session = Depends(get_db)):
    if not ProjectStore(db).get_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    task = export_project_archive.delay(project_id)
    return ExportJobResponse(project_id=project_id, task_id=task.id)
