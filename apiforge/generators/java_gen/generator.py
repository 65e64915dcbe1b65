"""Composition of the Spring Boot (Java) scaffold."""
from typing import Dict
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import normalize_database
from apiforge.generators.java_gen.render import (
    render_pom_xml,
    render_application_properties,
    render_application_class,
    render_user_model,
    render_user_repository,
    render_user_controller,
    render_security_config,
    render_jwt_token_util,
    render_jwt_request_filter,
    render_user_details_service,
    render_auth_controller,
    render_auth_request,
    render_auth_response,
    render_user_service,
    render_user_service_impl,
    render_resource_not_found_exception,
    render_global_exception_handler,
    render_swagger_config,
    render_application_tests,
    render_env,
    render_readme,
)

SUPPORTED_DATABASES = {"mysql", "postgres", "h2"}
FALLBACK_DATABASE = "h2"

SOURCE_ROOT = "src/main/java/com/backendio/api"
TEST_ROOT = "src/test/java/com/backendio/api"


def generate_java_code(options: GeneratorOptions) -> Dict[str, str]:
    """
    Generate a Spring Boot REST API skeleton.

    Args:
        options: Version, database and feature flags of the scaffold

    Returns:
        Ordered mapping of file path to file content
    """
    options = normalize_database(options, SUPPORTED_DATABASES, FALLBACK_DATABASE)
    features = options.features

    files: Dict[str, str] = {
        "pom.xml": render_pom_xml(options),
        "src/main/resources/application.properties": render_application_properties(options),
        f"{SOURCE_ROOT}/Application.java": render_application_class(),
        f"{SOURCE_ROOT}/model/User.java": render_user_model(options),
        f"{SOURCE_ROOT}/repository/UserRepository.java": render_user_repository(),
        f"{SOURCE_ROOT}/controller/UserController.java": render_user_controller(options),
    }

    if features.jwt:
        files[f"{SOURCE_ROOT}/security/SecurityConfig.java"] = render_security_config(options)
        files[f"{SOURCE_ROOT}/security/JwtTokenUtil.java"] = render_jwt_token_util()
        files[f"{SOURCE_ROOT}/security/JwtRequestFilter.java"] = render_jwt_request_filter()
        files[f"{SOURCE_ROOT}/security/UserDetailsServiceImpl.java"] = render_user_details_service()
        files[f"{SOURCE_ROOT}/controller/AuthController.java"] = render_auth_controller(options)
        files[f"{SOURCE_ROOT}/model/AuthRequest.java"] = render_auth_request()
        files[f"{SOURCE_ROOT}/model/AuthResponse.java"] = render_auth_response()

    files[f"{SOURCE_ROOT}/service/UserService.java"] = render_user_service()
    files[f"{SOURCE_ROOT}/service/UserServiceImpl.java"] = render_user_service_impl(options)
    files[f"{SOURCE_ROOT}/exception/ResourceNotFoundException.java"] = render_resource_not_found_exception()
    files[f"{SOURCE_ROOT}/exception/GlobalExceptionHandler.java"] = render_global_exception_handler()

    if features.swagger:
        files[f"{SOURCE_ROOT}/config/SwaggerConfig.java"] = render_swagger_config()

    if features.tests:
        files[f"{TEST_ROOT}/ApplicationTests.java"] = render_application_tests(options)

    files[".env"] = render_env(options)
    files["README.md"] = render_readme(options)
    return files
