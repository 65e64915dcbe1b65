from fastapi import APIRouter
from apiforge.core.catalog import (
    BACKENDS,
    DATABASES,
    VERSION_OPTIONS,
    database_options_for,
    default_database,
    features_for,
)
from apiforge.schemas.projects import BackendCatalog, CatalogOption, CatalogResponse, FeatureOption

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog():
    backends = [
        BackendCatalog(
            id=backend.id,
            name=backend.name,
            versions=VERSION_OPTIONS[backend.id],
            default_database=default_database(backend.id),
            databases=[CatalogOption(id=db.id, name=db.name) for db in database_options_for(backend.id)],
            features=[
                FeatureOption(id=f.id, name=f.name, description=f.description, generated=f.generated)
                for f in features_for(backend.id)
            ],
        )
        for backend in BACKENDS
    ]
    return CatalogResponse(
        backends=backends,
        databases=[CatalogOption(id=db.id, name=db.name) for db in DATABASES],
    )
