from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from apiforge.db.session import get_db
from apiforge.db.repository import ProjectStore
from apiforge.schemas.projects import FileContentRequest, FileSummary, GeneratedFileResponse

router = APIRouter(prefix="/projects/{project_id}/files")


def _store_for(db: Session, project_id: int) -> ProjectStore:
    store = ProjectStore(db)
    if not store.get_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return store


@router.get("", response_model=List[FileSummary])
def list_files(project_id: int, db: Session = Depends(get_db)):
    store = _store_for(db, project_id)
    return [FileSummary(file_path=f.file_path, size=len(f.file_content)) for f in store.list_files(project_id)]


@router.get("/{file_path:path}", response_model=GeneratedFileResponse)
def get_file(project_id: int, file_path: str, db: Session = Depends(get_db)):
    record = _store_for(db, project_id).get_file(project_id, file_path)
    if not record:
        raise HTTPException(status_code=404, detail="File not found")
    return record


@router.put("/{file_path:path}", response_model=GeneratedFileResponse)
def edit_file(project_id: int, file_path: str, req: FileContentRequest, db: Session = Depends(get_db)):
    record = _store_for(db, project_id).update_file_content(project_id, file_path, req.file_content)
    if not record:
        raise HTTPException(status_code=404, detail="File not found")
    return record
