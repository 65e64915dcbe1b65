"""Tests for the Celery export task, run eagerly against the in-memory store."""
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import patch
from apiforge.core.config import settings
from apiforge.tasks.exports import export_project_archive


def test_export_task_writes_archive(store, session_factory):
    """The task writes <exports_dir>/<project id>/<archive name> with the stored files."""
    project = store.create_project("Inventory API")
    store.replace_files(project.id, {"go.mod": "module x\n", "handlers/user_handler.go": "package handlers\n"})

    with tempfile.TemporaryDirectory() as temp_dir:
        with patch("apiforge.tasks.exports.SessionLocal", session_factory), \
                patch.object(settings, "exports_dir", temp_dir):
            result = export_project_archive(project.id)

        target = Path(temp_dir) / str(project.id) / "Inventory-API.zip"
        assert result == str(target)
        with zipfile.ZipFile(target) as archive:
            assert archive.namelist() == ["go.mod", "handlers/user_handler.go"]


def test_export_task_missing_project(session_factory):
    """Unknown projects are logged and yield None."""
    with patch("apiforge.tasks.exports.SessionLocal", session_factory):
        assert export_project_archive(4242) is None
