"""Composition of the Express (Node.js) scaffold."""
from typing import Dict
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import normalize_database
from apiforge.generators.node_gen.render import (
    render_package_json,
    render_index_js,
    render_env,
    render_db_config,
    render_user_model,
    render_user_controller,
    render_user_routes,
    render_auth_controller,
    render_auth_routes,
    render_auth_middleware,
    render_user_test,
    render_readme,
)

SUPPORTED_DATABASES = {"mongodb", "mysql", "postgres", "sqlite"}
FALLBACK_DATABASE = "mongodb"


def generate_node_code(options: GeneratorOptions) -> Dict[str, str]:
    """
    Generate an Express REST API skeleton.

    Args:
        options: Version, database and feature flags of the scaffold

    Returns:
        Ordered mapping of file path to file content
    """
    options = normalize_database(options, SUPPORTED_DATABASES, FALLBACK_DATABASE)
    features = options.features

    files: Dict[str, str] = {
        "package.json": render_package_json(options),
        "index.js": render_index_js(options),
        ".env": render_env(options),
        "config/db.config.js": render_db_config(options),
        "models/user.model.js": render_user_model(options),
        "controllers/user.controller.js": render_user_controller(options),
        "routes/user.routes.js": render_user_routes(options),
    }

    if features.jwt:
        files["controllers/auth.controller.js"] = render_auth_controller(options)
        files["routes/auth.routes.js"] = render_auth_routes(options)
        files["middleware/auth.middleware.js"] = render_auth_middleware()

    if features.tests:
        files["tests/user.test.js"] = render_user_test(options)

    files["README.md"] = render_readme(options)
    return files
