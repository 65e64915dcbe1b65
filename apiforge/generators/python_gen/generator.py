"""Composition of the Flask (Python) scaffold."""
from typing import Dict
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import normalize_database
from apiforge.generators.python_gen.render import (
    render_requirements_txt,
    render_app_py,
    render_database_py,
    render_models_py,
    render_auth_py,
    render_auth_routes_py,
    render_user_routes_py,
    render_swagger_json,
    render_test_app_py,
    render_env,
    render_readme,
)

SUPPORTED_DATABASES = {"mongodb", "mysql", "postgres", "sqlite"}
FALLBACK_DATABASE = "mongodb"


def generate_python_code(options: GeneratorOptions) -> Dict[str, str]:
    """
    Generate a Flask REST API skeleton.

    Args:
        options: Version, database and feature flags of the scaffold

    Returns:
        Ordered mapping of file path to file content
    """
    options = normalize_database(options, SUPPORTED_DATABASES, FALLBACK_DATABASE)
    features = options.features

    files: Dict[str, str] = {
        "requirements.txt": render_requirements_txt(options),
        "app.py": render_app_py(options),
        "database.py": render_database_py(options),
        "models.py": render_models_py(options),
    }

    if features.jwt:
        files["auth.py"] = render_auth_py()
        files["routes/auth_routes.py"] = render_auth_routes_py(options)

    files["routes/user_routes.py"] = render_user_routes_py(options)
    files["routes/__init__.py"] = "# Routes package\n"

    if features.swagger:
        files["static/swagger.json"] = render_swagger_json(options)

    if features.tests:
        files["tests/test_app.py"] = render_test_app_py(options)

    files[".env"] = render_env(options)
    files["README.md"] = render_readme(options)
    return files
