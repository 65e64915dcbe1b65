from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List
from datetime import datetime
from apiforge.core.workflow import ProjectState


class ProjectCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["My Shop API"])
    description: Optional[str] = Field(None, examples=["Orders and customers"])
    owner: Optional[str] = None


class ProjectUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    owner: str
    created_at: datetime
    updated_at: datetime


class ConfigUpdateRequest(BaseModel):
    """Partial configuration; omitted fields keep their current value."""
    backend_type: Optional[str] = Field(None, examples=["node"])
    backend_version: Optional[str] = Field(None, examples=["v18.x (LTS)"])
    database_type: Optional[str] = Field(None, examples=["mongodb"])
    database_connection_string: Optional[str] = Field(None, examples=["mongodb://localhost:27017/myapp"])
    features: Optional[Dict[str, bool]] = Field(None, examples=[{"jwt": True, "crud": True}])
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class ConfigResponse(BaseModel):
    project_id: int
    backend_type: str
    backend_version: str
    database_type: Optional[str] = None
    database_connection_string: Optional[str] = None
    features: Dict[str, bool] = {}
    state: ProjectState


class GeneratedFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    file_path: str
    file_content: str
    updated_at: datetime


class FileSummary(BaseModel):
    file_path: str
    size: int


class FileContentRequest(BaseModel):
    file_content: str


class GenerationResponse(BaseModel):
    project_id: int
    backend_type: str
    state: ProjectState
    selected_file: str
    files: List[FileSummary]


class ExportJobResponse(BaseModel):
    project_id: int
    task_id: str


class CatalogOption(BaseModel):
    id: str
    name: str


class FeatureOption(BaseModel):
    id: str
    name: str
    description: str
    generated: bool


class BackendCatalog(BaseModel):
    id: str
    name: str
    versions: List[str]
    default_database: str
    databases: List[CatalogOption]
    features: List[FeatureOption]


class CatalogResponse(BaseModel):
    backends: List[BackendCatalog]
    databases: List[CatalogOption]
