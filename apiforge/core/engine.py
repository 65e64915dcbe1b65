from __future__ import annotations
import copy
import logging
from typing import Any, Dict, Optional, Tuple
from apiforge.core.catalog import (
    UNCONFIGURED_DEFAULTS,
    default_connection_string,
    default_database,
    default_version,
    validate_combination,
)
from apiforge.core.errors import GeneratorError, ProjectNotFoundError, UnsavedChangesError
from apiforge.core.workflow import GenerationResult, ProjectState
from apiforge.db.models import Project
from apiforge.db.repository import CONFIG_FIELDS, ProjectStore
from apiforge.export.packager import archive_name, build_archive
from apiforge.generators.registry import GeneratorRegistry
from apiforge.generators.types import GeneratorOptions

log = logging.getLogger(__name__)


class ProjectSession:
    """In-memory working copy of one project's configuration and files.

    Tracks the dirty / generated flags that gate generation and drives the
    generate -> persist -> select cycle against a ProjectStore.
    """

    def __init__(
        self,
        store: ProjectStore,
        project: Project,
        config: Dict[str, Any],
        files: Dict[str, str],
        registry: Optional[GeneratorRegistry] = None,
        generated: bool = True,
    ):
        self.store = store
        self.project = project
        self.project_id = project.id
        self.config = config
        self.files = files
        self.registry = registry or GeneratorRegistry.default()
        self.has_unsaved_changes = False
        self.is_code_generated = bool(files) and generated
        self.selected_file = next(iter(files), "")

    @classmethod
    def load(cls, store: ProjectStore, project_id: int, registry: Optional[GeneratorRegistry] = None) -> "ProjectSession":
        project = store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        row = store.get_config(project_id)
        if row is None:
            config = copy.deepcopy(UNCONFIGURED_DEFAULTS)
        else:
            config = {key: getattr(row, key) for key in CONFIG_FIELDS}
            config["features"] = dict(row.features or {})

        generated = row is not None and row.generated_at is not None
        return cls(store, project, config, store.files_as_mapping(project_id), registry, generated)

    @property
    def state(self) -> ProjectState:
        if self.has_unsaved_changes:
            return ProjectState.DIRTY
        if not self.config.get("backend_type"):
            return ProjectState.UNCONFIGURED
        if self.is_code_generated:
            return ProjectState.GENERATED
        return ProjectState.SAVED_STALE

    def _extra(self, stage: str) -> dict:
        return {"project_id": self.project_id, "stage": stage}

    # Configuration model

    def update_config(self, **partial: Any) -> None:
        """Merge fields into the working configuration; no validation happens here."""
        unknown = set(partial) - set(CONFIG_FIELDS)
        if unknown:
            raise TypeError(f"Unknown configuration fields: {sorted(unknown)}")
        if "features" in partial:
            partial["features"] = dict(partial["features"] or {})
        # Unset backend and version are stored as empty strings
        for key in ("backend_type", "backend_version"):
            if key in partial and partial[key] is None:
                partial[key] = ""
        self.config.update(partial)
        self.has_unsaved_changes = True
        self.is_code_generated = False

    def update_feature(self, feature_id: str, enabled: bool) -> None:
        features = dict(self.config.get("features") or {})
        features[feature_id] = bool(enabled)
        self.update_config(features=features)

    def select_backend(self, backend_type: str) -> None:
        """Switch backend and reset version and database to that backend's defaults."""
        database_type = default_database(backend_type)
        self.update_config(
            backend_type=backend_type,
            backend_version=default_version(backend_type),
            database_type=database_type,
            database_connection_string=default_connection_string(database_type),
        )

    def select_database(self, database_type: str) -> None:
        self.update_config(
            database_type=database_type,
            database_connection_string=default_connection_string(database_type),
        )

    def apply_changes(self, **partial: Any) -> None:
        """Merge a partial configuration the way a form would.

        A new backend brings its default version and database, and a new
        database its default connection string, unless the payload sets them.
        """
        backend_type = partial.get("backend_type")
        if backend_type and backend_type != self.config.get("backend_type"):
            self.select_backend(partial.pop("backend_type"))
        database_type = partial.get("database_type")
        if (
            database_type
            and "database_connection_string" not in partial
            and database_type != self.config.get("database_type")
        ):
            self.select_database(partial.pop("database_type"))
        if partial:
            self.update_config(**partial)

    def save_config(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        row = self.store.save_config(self.project_id, self.config)
        # An unchanged configuration keeps its generated files current
        self.is_code_generated = bool(self.files) and row.generated_at is not None
        updates = {}
        if name is not None:
            updates["name"] = name
        if description is not None:
            updates["description"] = description
        if updates:
            self.project = self.store.update_project(self.project_id, updates) or self.project
        self.has_unsaved_changes = False
        log.info("Configuration saved", extra=self._extra("save"))

    # Generation

    def generate_code(self) -> GenerationResult:
        """Regenerate the project's file set from the saved configuration.

        Raises:
            UnsavedChangesError: the working configuration was not saved
            InvalidConfigurationError: the backend/database pair is not allowed
            UnsupportedBackendError: no generator is registered for the backend
            GeneratorError: the generator itself failed
        """
        if self.has_unsaved_changes:
            raise UnsavedChangesError("Save the configuration before generating code")

        self.store.save_config(self.project_id, self.config)
        backend_type = self.config.get("backend_type") or ""

        if not backend_type:
            self.store.delete_files(self.project_id)
            self.store.mark_generated(self.project_id, False)
            self.files = {}
            self.selected_file = ""
            self.is_code_generated = False
            log.info("No backend configured, cleared files", extra=self._extra("generate"))
            return GenerationResult(self.project_id, backend_type, self.state, "", {})

        database_type = self.config.get("database_type") or "mongodb"
        connection_string = self.config.get("database_connection_string") or default_connection_string(database_type)
        entry = self.registry.get(backend_type)
        validate_combination(backend_type, database_type)

        options = GeneratorOptions.build(
            version=entry.normalize_version(self.config.get("backend_version") or ""),
            database_type=database_type,
            connection_string=connection_string,
            features=self.config.get("features"),
        )
        log.info("Generating %s scaffold", entry.language, extra=self._extra("generate"))
        try:
            files = entry.generate(options)
        except Exception as exc:
            log.exception("Generator failed", extra=self._extra("generate"))
            raise GeneratorError(backend_type, entry.language, exc) from exc

        self.store.replace_files(self.project_id, files)
        self.store.mark_generated(self.project_id)
        self.files = dict(files)
        self.is_code_generated = True
        self.selected_file = next(iter(self.files), "")
        log.info("Generated %d files", len(self.files), extra=self._extra("generate"))
        return GenerationResult(self.project_id, backend_type, self.state, self.selected_file, dict(self.files))

    # Preview / editing

    def select_file(self, file_path: str) -> bool:
        if file_path not in self.files:
            return False
        self.selected_file = file_path
        return True

    def edit_file(self, file_path: str, content: str) -> bool:
        """Overwrite one stored file; the edit lasts until the next generation."""
        if self.store.update_file_content(self.project_id, file_path, content) is None:
            return False
        self.files[file_path] = content
        return True

    def export(self) -> Tuple[str, bytes]:
        """Regenerate and package the project as ``(archive name, zip bytes)``."""
        result = self.generate_code()
        log.info("Packaging %d files", len(result.files), extra=self._extra("export"))
        return archive_name(self.project.name), build_archive(result.files)
