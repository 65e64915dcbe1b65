"""Composition of the Slim + Eloquent (PHP) scaffold."""
from typing import Dict
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import normalize_database
from apiforge.generators.php_gen.render import (
    render_composer_json,
    render_index_php,
    render_htaccess,
    render_database_config,
    render_jwt_config,
    render_bootstrap_app,
    render_user_controller,
    render_auth_controller,
    render_user_model,
    render_jwt_middleware,
    render_routes,
    render_openapi,
    render_phpunit_xml,
    render_user_controller_test,
    render_env,
    render_readme,
)

SUPPORTED_DATABASES = {"mysql", "postgres", "sqlite"}
FALLBACK_DATABASE = "mysql"


def generate_php_code(options: GeneratorOptions) -> Dict[str, str]:
    """
    Generate a Slim REST API skeleton backed by Eloquent.

    Args:
        options: Version, database and feature flags of the scaffold

    Returns:
        Ordered mapping of file path to file content
    """
    options = normalize_database(options, SUPPORTED_DATABASES, FALLBACK_DATABASE)
    features = options.features

    files: Dict[str, str] = {
        "composer.json": render_composer_json(options),
        "public/index.php": render_index_php(),
        "public/.htaccess": render_htaccess(),
        "config/database.php": render_database_config(options),
    }
    if features.jwt:
        files["config/jwt.php"] = render_jwt_config()

    files["bootstrap/app.php"] = render_bootstrap_app(options)
    files["app/Controllers/UserController.php"] = render_user_controller(options)
    if features.jwt:
        files["app/Controllers/AuthController.php"] = render_auth_controller()

    files["app/Models/User.php"] = render_user_model(options)
    if features.jwt:
        files["app/Middleware/JwtMiddleware.php"] = render_jwt_middleware()

    files["app/routes.php"] = render_routes(options)

    if features.swagger:
        files["public/openapi.json"] = render_openapi(options)

    if features.tests:
        files["phpunit.xml"] = render_phpunit_xml()
        files["tests/UserControllerTest.php"] = render_user_controller_test(options)

    files[".env"] = render_env(options)
    files["README.md"] = render_readme(options)
    return files
