"""Error taxonomy for configuration, dispatch and generation failures."""


class ApiForgeError(Exception):
    """Base class for all apiforge errors."""


class ProjectNotFoundError(ApiForgeError):
    def __init__(self, project_id: int):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class UnsavedChangesError(ApiForgeError):
    """Raised when generation is requested while the configuration has unsaved changes."""


class InvalidConfigurationError(ApiForgeError):
    """Raised for backend/database pairs that cannot be generated."""


class UnsupportedBackendError(ApiForgeError):
    def __init__(self, backend_type: str):
        super().__init__(f"Unsupported backend type: {backend_type}")
        self.backend_type = backend_type


class GeneratorError(ApiForgeError):
    """Wraps any failure raised from inside a language generator."""

    def __init__(self, backend_type: str, language: str, cause: Exception):
        super().__init__(f"Failed to load the {language} generator: {cause}")
        self.backend_type = backend_type
        self.language = language
        self.cause = cause
