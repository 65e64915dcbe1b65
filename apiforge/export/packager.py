"""Packaging of generated file sets: zip archives and on-disk trees."""
import io
import re
import zipfile
from pathlib import Path
from typing import Mapping


def archive_name(project_name: str) -> str:
    """Archive file name for a project: whitespace runs become '-', '.zip' is appended."""
    return re.sub(r"\s+", "-", project_name) + ".zip"


def build_archive(files: Mapping[str, str]) -> bytes:
    """
    Pack a file mapping into an in-memory zip archive.

    Args:
        files: Mapping of forward-slash path to file content

    Returns:
        The deflated archive as bytes; nested folders follow the path segments
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for path, content in files.items():
            archive.writestr(path, content)
    return buffer.getvalue()


def write_files(files: Mapping[str, str], out_dir: Path) -> None:
    """
    Write a file mapping to the output directory.

    Args:
        files: Mapping of forward-slash path to file content
        out_dir: Base output directory path
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    for path, content in files.items():
        file_path = out_dir.joinpath(*path.split("/"))
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
