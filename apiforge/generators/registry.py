from dataclasses import dataclass
from typing import Callable, Dict
from apiforge.core.errors import UnsupportedBackendError
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.node_gen import generate_node_code
from apiforge.generators.python_gen import generate_python_code
from apiforge.generators.php_gen import generate_php_code
from apiforge.generators.java_gen import generate_java_code
from apiforge.generators.go_gen import generate_go_code

GenerateFn = Callable[[GeneratorOptions], Dict[str, str]]


def _as_is(default: str) -> Callable[[str], str]:
    return lambda version: version or default


def _strip(prefix: str, default: str) -> Callable[[str], str]:
    return lambda version: (version or "").replace(prefix, "") or default


@dataclass(frozen=True)
class GeneratorEntry:
    language: str
    generate: GenerateFn
    normalize_version: Callable[[str], str]


@dataclass
class GeneratorRegistry:
    mapping: Dict[str, GeneratorEntry]

    def get(self, backend_type: str) -> GeneratorEntry:
        try:
            return self.mapping[backend_type]
        except KeyError:
            raise UnsupportedBackendError(backend_type) from None

    def supports(self, backend_type: str) -> bool:
        return backend_type in self.mapping

    @staticmethod
    def default() -> "GeneratorRegistry":
        return GeneratorRegistry(mapping={
            "node": GeneratorEntry("Node.js", generate_node_code, _as_is("v18.x")),
            "python": GeneratorEntry("Python", generate_python_code, _strip("v", "3.11")),
            "php": GeneratorEntry("PHP", generate_php_code, _strip("v", "8.2")),
            "java": GeneratorEntry("Java", generate_java_code, _as_is("Java 17 (LTS)")),
            "go": GeneratorEntry("Go", generate_go_code, _strip("Go ", "1.21")),
        })
