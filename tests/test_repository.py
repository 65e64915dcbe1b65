"""Tests for the SQLAlchemy-backed project store."""
from unittest.mock import patch
import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from apiforge.core.catalog import STORE_DEFAULTS
from apiforge.core.config import settings
from apiforge.db.models import GeneratedFile, ProjectConfig


class TestProjects:
    def test_create_uses_default_owner(self, store):
        """Projects without an owner are attributed to the configured default owner."""
        project = store.create_project("Shop API", "Orders")
        assert project.id is not None
        assert project.owner == settings.default_owner
        assert store.get_project(project.id).name == "Shop API"

    def test_list_filters_by_owner(self, store):
        store.create_project("A", owner="alice@example.com")
        store.create_project("B", owner="bob@example.com")
        assert [p.name for p in store.list_projects("alice@example.com")] == ["A"]
        assert len(store.list_projects()) == 2

    def test_update_and_missing(self, store):
        """Updates merge known fields; missing projects give None / False."""
        project = store.create_project("Old")
        updated = store.update_project(project.id, {"name": "New", "unknown": "ignored"})
        assert updated.name == "New"
        assert store.update_project(9999, {"name": "x"}) is None
        assert store.delete_project(9999) is False

    def test_delete_cascades(self, store, db):
        """Deleting a project leaves no configuration or file rows behind."""
        project = store.create_project("Doomed")
        store.save_config(project.id, {"backend_type": "go"})
        store.replace_files(project.id, {"go.mod": "module x\n", "main.go": "package main\n"})

        assert store.delete_project(project.id) is True

        files_left = db.scalar(select(func.count()).select_from(GeneratedFile).where(GeneratedFile.project_id == project.id))
        configs_left = db.scalar(select(func.count()).select_from(ProjectConfig).where(ProjectConfig.project_id == project.id))
        assert files_left == 0, "generated files should be deleted with their project"
        assert configs_left == 0, "configuration should be deleted with its project"


class TestConfigs:
    def test_partial_create_fills_store_defaults(self, store):
        """Fields absent on creation take the store defaults."""
        project = store.create_project("P")
        config = store.save_config(project.id, {"backend_type": "python"})
        assert config.backend_type == "python"
        assert config.database_type == STORE_DEFAULTS["database_type"]
        assert config.features == STORE_DEFAULTS["features"]

    def test_update_merges(self, store):
        """Later saves only touch the provided fields."""
        project = store.create_project("P")
        store.save_config(project.id, {"backend_type": "php", "database_type": "mysql"})
        config = store.save_config(project.id, {"features": {"jwt": False, "swagger": True}})
        assert config.backend_type == "php"
        assert config.database_type == "mysql"
        assert config.features == {"jwt": False, "swagger": True}

    def test_generated_marker_cleared_by_changes_only(self, store):
        """The generated marker survives identical saves and is dropped by a real change."""
        project = store.create_project("P")
        assert store.mark_generated(project.id) is None
        store.save_config(project.id, {"backend_type": "go", "database_type": "mysql"})
        assert store.mark_generated(project.id).generated_at is not None

        config = store.save_config(project.id, {"backend_type": "go", "features": dict(STORE_DEFAULTS["features"])})
        assert config.generated_at is not None

        config = store.save_config(project.id, {"database_type": "postgres"})
        assert config.generated_at is None

        store.mark_generated(project.id)
        assert store.mark_generated(project.id, False).generated_at is None

    def test_delete_config(self, store):
        project = store.create_project("P")
        assert store.delete_config(project.id) is False
        store.save_config(project.id, {})
        assert store.delete_config(project.id) is True
        assert store.get_config(project.id) is None


class TestFiles:
    def test_replace_files_keeps_order(self, store):
        """The stored set mirrors the mapping, in insertion order."""
        project = store.create_project("P")
        store.replace_files(project.id, {"a.txt": "1", "b.txt": "2"})
        records = store.replace_files(project.id, {"z.txt": "3", "y.txt": "4"})
        assert [r.file_path for r in records] == ["z.txt", "y.txt"]
        assert store.files_as_mapping(project.id) == {"z.txt": "3", "y.txt": "4"}

    def test_replace_files_rolls_back(self, store):
        """A failed commit leaves the previous file set untouched."""
        project = store.create_project("P")
        store.replace_files(project.id, {"keep.txt": "old"})

        with patch.object(store.db, "commit", side_effect=SQLAlchemyError("disk full")):
            with pytest.raises(SQLAlchemyError):
                store.replace_files(project.id, {"new.txt": "new"})

        assert store.files_as_mapping(project.id) == {"keep.txt": "old"}

    def test_update_file_content(self, store):
        """Only existing files can be edited."""
        project = store.create_project("P")
        store.replace_files(project.id, {"index.js": "old"})
        assert store.update_file_content(project.id, "index.js", "new").file_content == "new"
        assert store.update_file_content(project.id, "missing.js", "x") is None

    def test_upsert_and_delete_files(self, store):
        project = store.create_project("P")
        store.upsert_file(project.id, "a.txt", "1")
        store.upsert_file(project.id, "a.txt", "2")
        assert store.files_as_mapping(project.id) == {"a.txt": "2"}
        assert store.delete_files(project.id) is True
        assert store.list_files(project.id) == []
        assert store.delete_files(project.id) is False
