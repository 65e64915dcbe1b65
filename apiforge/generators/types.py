"""Dataclasses for scaffold generation."""
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FeatureFlags:
    """Generated feature toggles. Language-tagged extras never reach a generator."""
    jwt: bool = False
    crud: bool = False
    swagger: bool = False
    tests: bool = False

    @classmethod
    def from_mapping(cls, features: Optional[Mapping[str, Any]]) -> "FeatureFlags":
        features = features or {}
        return cls(
            jwt=bool(features.get("jwt", False)),
            crud=bool(features.get("crud", False)),
            swagger=bool(features.get("swagger", False)),
            tests=bool(features.get("tests", False)),
        )


@dataclass(frozen=True)
class DatabaseOptions:
    type: str
    connection_string: str


@dataclass(frozen=True)
class GeneratorOptions:
    """Input of every language generator."""
    version: str
    database: DatabaseOptions
    features: FeatureFlags = field(default_factory=FeatureFlags)

    @classmethod
    def build(
        cls,
        version: str,
        database_type: str,
        connection_string: str,
        features: Optional[Mapping[str, Any]] = None,
    ) -> "GeneratorOptions":
        return cls(
            version=version,
            database=DatabaseOptions(type=database_type, connection_string=connection_string),
            features=FeatureFlags.from_mapping(features),
        )

    def with_database(self, database_type: str, connection_string: str) -> "GeneratorOptions":
        return replace(self, database=DatabaseOptions(type=database_type, connection_string=connection_string))
