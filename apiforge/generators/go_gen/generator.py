"""Composition of the Gin + GORM (Go) scaffold."""
from typing import Dict
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import normalize_database
from apiforge.generators.go_gen.render import (
    render_go_mod,
    render_main_go,
    render_config_go,
    render_env,
    render_user_model,
    render_database_go,
    render_user_handler,
    render_auth_handler,
    render_jwt_middleware,
    render_routes_go,
    render_jwt_utils,
    render_response_utils,
    render_user_handler_test,
    render_readme,
)

# GORM has no MongoDB driver
SUPPORTED_DATABASES = {"mysql", "postgres", "sqlite"}
FALLBACK_DATABASE = "mysql"


def generate_go_code(options: GeneratorOptions) -> Dict[str, str]:
    """
    Generate a Gin REST API skeleton backed by GORM.

    Args:
        options: Version, database and feature flags of the scaffold

    Returns:
        Ordered mapping of file path to file content
    """
    options = normalize_database(options, SUPPORTED_DATABASES, FALLBACK_DATABASE)
    features = options.features

    files: Dict[str, str] = {
        "go.mod": render_go_mod(options),
        "main.go": render_main_go(options),
        "config/config.go": render_config_go(options),
        ".env": render_env(options),
        "models/user.go": render_user_model(options),
        "database/database.go": render_database_go(options),
        "handlers/user_handler.go": render_user_handler(options),
    }

    if features.jwt:
        files["handlers/auth_handler.go"] = render_auth_handler(options)
        files["middleware/jwt_middleware.go"] = render_jwt_middleware()

    files["routes/routes.go"] = render_routes_go(options)

    if features.jwt:
        files["utils/jwt_utils.go"] = render_jwt_utils()
    files["utils/response_utils.go"] = render_response_utils()

    if features.tests:
        files["handlers/user_handler_test.go"] = render_user_handler_test()

    files["README.md"] = render_readme(options)
    return files
