"""Tests for the generation orchestrator (ProjectSession)."""
import io
import zipfile
import pytest
from apiforge.core.catalog import default_connection_string, default_database, default_version
from apiforge.core.engine import ProjectSession
from apiforge.core.errors import (
    GeneratorError,
    InvalidConfigurationError,
    ProjectNotFoundError,
    UnsavedChangesError,
    UnsupportedBackendError,
)
from apiforge.core.workflow import ProjectState
from apiforge.generators.registry import GeneratorEntry, GeneratorRegistry


@pytest.fixture
def project(store):
    return store.create_project("My Shop API", "Orders and customers")


def _configured_session(store, project, backend="node", **extra):
    session = ProjectSession.load(store, project.id)
    session.select_backend(backend)
    if extra:
        session.update_config(**extra)
    session.save_config()
    return session


class TestStateMachine:
    def test_new_project_is_unconfigured(self, store, project):
        session = ProjectSession.load(store, project.id)
        assert session.state == ProjectState.UNCONFIGURED
        assert session.files == {}

    def test_missing_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            ProjectSession.load(store, 12345)

    def test_edit_save_generate_cycle(self, store, project):
        """Editing marks the session dirty, saving makes it stale, generating makes it current."""
        session = ProjectSession.load(store, project.id)
        session.select_backend("node")
        assert session.state == ProjectState.DIRTY
        assert session.config["database_type"] == "mongodb"
        assert session.config["backend_version"] == "v18.x (LTS)"

        session.save_config()
        assert session.state == ProjectState.SAVED_STALE

        result = session.generate_code()
        assert result.state == ProjectState.GENERATED
        assert result.selected_file == "package.json"
        assert store.files_as_mapping(project.id) == result.files

    def test_unsaved_changes_block_generation(self, store, project):
        """Generation is refused while the working configuration differs from the saved one."""
        session = _configured_session(store, project)
        session.update_feature("jwt", True)
        with pytest.raises(UnsavedChangesError):
            session.generate_code()
        assert store.list_files(project.id) == []

    def test_reload_restores_generated_state(self, store, project):
        _configured_session(store, project, "go").generate_code()
        reloaded = ProjectSession.load(store, project.id)
        assert reloaded.state == ProjectState.GENERATED
        assert reloaded.config["backend_type"] == "go"
        assert reloaded.selected_file == "go.mod"

    def test_reload_after_config_change_is_stale(self, store, project):
        """Files generated for an older configuration are reported as stale across loads."""
        _configured_session(store, project, "node").generate_code()

        session = ProjectSession.load(store, project.id)
        session.select_backend("go")
        session.select_database("mysql")
        session.save_config()
        assert session.state == ProjectState.SAVED_STALE

        reloaded = ProjectSession.load(store, project.id)
        assert reloaded.state == ProjectState.SAVED_STALE
        assert "package.json" in reloaded.files

        reloaded.generate_code()
        assert ProjectSession.load(store, project.id).state == ProjectState.GENERATED

    def test_saving_unchanged_config_keeps_generated(self, store, project):
        session = _configured_session(store, project, "php")
        session.generate_code()
        session.update_config(backend_type="php")
        session.save_config()
        assert session.state == ProjectState.GENERATED
        assert ProjectSession.load(store, project.id).state == ProjectState.GENERATED

    def test_null_backend_and_version_become_empty(self, store, project):
        session = _configured_session(store, project, "node")
        session.update_config(backend_type=None, backend_version=None)
        assert session.config["backend_type"] == ""
        assert session.config["backend_version"] == ""
        session.save_config()
        assert session.state == ProjectState.UNCONFIGURED
        assert store.get_config(project.id).backend_type == ""

    @pytest.mark.parametrize("backend", ["java", "php", "go"])
    def test_apply_changes_takes_backend_defaults(self, store, project, backend):
        """A bare backend switch brings that backend's version and database."""
        session = ProjectSession.load(store, project.id)
        session.apply_changes(backend_type=backend)
        assert session.config["backend_version"] == default_version(backend)
        assert session.config["database_type"] == default_database(backend)
        assert session.config["database_connection_string"] == default_connection_string(default_database(backend))

    def test_apply_changes_keeps_explicit_fields(self, store, project):
        session = ProjectSession.load(store, project.id)
        session.apply_changes(backend_type="go", backend_version="Go 1.20", database_type="postgres")
        assert session.config["backend_version"] == "Go 1.20"
        assert session.config["database_type"] == "postgres"
        assert session.config["database_connection_string"] == default_connection_string("postgres")

        session.apply_changes(database_type="mysql", database_connection_string="mysql://u:p@db:3306/shop")
        assert session.config["database_connection_string"] == "mysql://u:p@db:3306/shop"
        assert session.config["backend_version"] == "Go 1.20"

    def test_save_updates_project_metadata(self, store, project):
        session = _configured_session(store, project)
        session.save_config(name="Renamed", description="New")
        assert store.get_project(project.id).name == "Renamed"


class TestGeneration:
    def test_regeneration_is_idempotent_and_drops_edits(self, store, project):
        """Regenerating replaces the whole set, discarding manual edits."""
        session = _configured_session(store, project, "python")
        first = session.generate_code()
        assert session.edit_file("app.py", "# edited\n") is True
        assert store.get_file(project.id, "app.py").file_content == "# edited\n"

        second = session.generate_code()
        assert second.files == first.files
        assert store.files_as_mapping(project.id) == first.files

    def test_feature_change_replaces_file_set(self, store, project):
        """Files that the new configuration no longer produces are removed."""
        session = _configured_session(store, project, "node", features={"jwt": True, "crud": True})
        assert "middleware/auth.middleware.js" in session.generate_code().files

        session.update_feature("jwt", False)
        session.save_config()
        files = session.generate_code().files
        assert "middleware/auth.middleware.js" not in files
        assert store.get_file(project.id, "middleware/auth.middleware.js") is None

    def test_empty_backend_clears_files(self, store, project):
        """A configuration without backend yields an empty file set."""
        session = _configured_session(store, project, "php")
        session.generate_code()
        session.update_config(backend_type="")
        session.save_config()

        result = session.generate_code()
        assert result.files == {}
        assert result.selected_file == ""
        assert store.list_files(project.id) == []
        assert session.state == ProjectState.UNCONFIGURED

    def test_invalid_pair_is_rejected(self, store, project):
        """Java cannot be generated against MongoDB."""
        session = _configured_session(store, project, "java", database_type="mongodb")
        with pytest.raises(InvalidConfigurationError):
            session.generate_code()
        assert store.list_files(project.id) == []

    def test_unsupported_backend(self, store, project):
        session = ProjectSession.load(store, project.id)
        session.update_config(backend_type="rust", database_type="postgres")
        session.save_config()
        with pytest.raises(UnsupportedBackendError):
            session.generate_code()

    def test_unknown_backend_is_unsupported_before_pair_check(self, store, project):
        """An unregistered backend is reported as such even with a Java-only database."""
        session = ProjectSession.load(store, project.id)
        session.update_config(backend_type="rust", database_type="h2")
        session.save_config()
        with pytest.raises(UnsupportedBackendError):
            session.generate_code()

    def test_generator_failure_is_wrapped(self, store, project):
        """Exceptions from a generator surface as GeneratorError and keep old files."""
        store.replace_files(project.id, {"previous.txt": "kept"})

        def broken(options):
            raise RuntimeError("template exploded")

        registry = GeneratorRegistry(mapping={"node": GeneratorEntry("Node.js", broken, lambda v: v)})
        session = ProjectSession.load(store, project.id, registry=registry)
        session.select_backend("node")
        session.save_config()

        with pytest.raises(GeneratorError) as exc:
            session.generate_code()
        assert exc.value.language == "Node.js"
        assert isinstance(exc.value.cause, RuntimeError)
        assert store.files_as_mapping(project.id) == {"previous.txt": "kept"}

    def test_missing_database_defaults_to_mongodb(self, store, project):
        """A saved config without database type generates against MongoDB."""
        session = ProjectSession.load(store, project.id)
        session.update_config(backend_type="node", database_type=None, database_connection_string=None)
        session.save_config()
        files = session.generate_code().files
        assert "MONGODB_URI=mongodb://localhost:27017/myapp" in files[".env"]


class TestPreviewAndExport:
    def test_select_file(self, store, project):
        session = _configured_session(store, project)
        session.generate_code()
        assert session.select_file("index.js") is True
        assert session.selected_file == "index.js"
        assert session.select_file("nope.js") is False
        assert session.selected_file == "index.js"

    def test_edit_missing_file(self, store, project):
        session = _configured_session(store, project)
        session.generate_code()
        assert session.edit_file("missing.js", "x") is False

    def test_export_regenerates_and_zips(self, store, project):
        """Export regenerates from the saved configuration and zips every file."""
        session = _configured_session(store, project)
        name, data = session.export()
        assert name == "My-Shop-API.zip"
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == list(store.files_as_mapping(project.id))

    def test_export_requires_saved_config(self, store, project):
        session = ProjectSession.load(store, project.id)
        session.select_backend("go")
        with pytest.raises(UnsavedChangesError):
            session.export()
