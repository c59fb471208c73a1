"""
Resolver manifest generator.

Builds the JSON document that deployment tooling reads to create AppSync
resolvers, their Lambda data sources and the backing functions. The document
is a plain dict serialized with ``json``; string escaping is left entirely to
the serializer.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, assert_never

from ..core.diagnostics import Diagnostic, DiagnosticCode, Severity
from ..core.errors import make_generation_error
from ..core.ir import DataSourceSpec, OperationSpec, ResolverKind

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA_URL = "https://lambda-graphql.dev/schemas/resolvers.json"
MANIFEST_VERSION = "1.0.0"
DATA_SOURCE_TYPE = "AWS_LAMBDA"
DATA_SOURCE_ROLE_ARN = "${LambdaDataSourceRole.Arn}"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass
class Manifest:
    """A built manifest document and what was noticed while building it."""

    document: dict[str, Any]
    data_sources: list[DataSourceSpec] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(self.document, indent=2)


class ManifestGenerator:
    """
    Generate ``resolvers.json`` from root operations.

    Args:
        strict_data_sources: Raise instead of warning when two resolvers name
            the same data source with different backing functions
    """

    def __init__(self, strict_data_sources: bool = False):
        self.strict_data_sources = strict_data_sources

    def render(
        self,
        operations: Iterable[OperationSpec],
        generated_at: datetime | None = None,
    ) -> str:
        """Generate the manifest JSON text."""
        return self.build(operations, generated_at).to_json()

    def build(
        self,
        operations: Iterable[OperationSpec],
        generated_at: datetime | None = None,
    ) -> Manifest:
        """
        Build the manifest document.

        Args:
            operations: Root operations, in the order resolvers should appear
            generated_at: Timestamp to record; defaults to now (UTC)

        Returns:
            Manifest with the document, derived data sources and diagnostics
        """
        operations = list(operations)
        data_sources, diagnostics = self.collect_data_sources(operations)

        document: dict[str, Any] = {
            "$schema": MANIFEST_SCHEMA_URL,
            "version": MANIFEST_VERSION,
            "generatedAt": format_timestamp(generated_at),
            "resolvers": [self._resolver_entry(op) for op in operations],
            "dataSources": [_data_source_entry(ds) for ds in data_sources],
            "functions": [],
        }
        return Manifest(document=document, data_sources=data_sources, diagnostics=diagnostics)

    def collect_data_sources(
        self, operations: Iterable[OperationSpec]
    ) -> tuple[list[DataSourceSpec], list[Diagnostic]]:
        """
        Derive the data sources used by unit resolvers.

        The first resolver naming a data source decides its backing function.
        Later resolvers that disagree produce a diagnostic, or a
        GenerationError in strict mode.
        """
        seen: dict[str, DataSourceSpec] = {}
        diagnostics: list[Diagnostic] = []

        for op in operations:
            if op.resolver_kind != ResolverKind.UNIT or not op.data_source:
                continue

            identity = backing_identity(op)
            existing = seen.get(op.data_source)
            if existing is None:
                seen[op.data_source] = DataSourceSpec(name=op.data_source, backing_identity=identity)
                continue
            if existing.backing_identity == identity:
                continue

            message = (
                f"Data source '{op.data_source}' is backed by '{existing.backing_identity}' "
                f"but {op.qualified_name} names '{identity}'"
            )
            if self.strict_data_sources:
                raise make_generation_error(message, location=op.qualified_name)
            logger.warning(f"{message}; keeping '{existing.backing_identity}'")
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.DATA_SOURCE_CONFLICT,
                    severity=Severity.WARNING,
                    message=message,
                    location=op.qualified_name,
                    entity=op.data_source,
                )
            )

        return list(seen.values()), diagnostics

    def _resolver_entry(self, op: OperationSpec) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "typeName": op.root_type.value,
            "fieldName": op.field_name,
            "kind": op.resolver_kind.value,
        }
        deployment = op.deployment

        match op.resolver_kind:
            case ResolverKind.UNIT:
                entry["dataSource"] = op.data_source
                _set_if(entry, "lambdaFunctionName", deployment.lambda_function_name)
                entry["lambdaFunctionLogicalId"] = backing_identity(op)
                entry["runtime"] = deployment.runtime
                _set_if(entry, "requestMapping", deployment.request_mapping)
                _set_if(entry, "responseMapping", deployment.response_mapping)
                _set_if(entry, "resourceName", deployment.resource_name)
                _set_if(entry, "memorySize", deployment.memory_size)
                _set_if(entry, "timeout", deployment.timeout)
                if deployment.policies:
                    entry["policies"] = list(deployment.policies)
                _set_if(entry, "role", deployment.role)
            case ResolverKind.PIPELINE:
                entry["functions"] = list(op.functions)
                entry["runtime"] = deployment.runtime
                _set_if(entry, "requestMapping", deployment.request_mapping)
                _set_if(entry, "responseMapping", deployment.response_mapping)
            case _:
                assert_never(op.resolver_kind)

        _set_if(entry, "description", op.description)
        return entry


def backing_identity(op: OperationSpec) -> str:
    """Logical id of the function behind a unit resolver."""
    return op.deployment.backing_identity or f"{op.data_source}Function"


def format_timestamp(value: datetime | None = None) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC."""
    if value is None:
        value = datetime.now(UTC)
    elif value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(TIMESTAMP_FORMAT)


def _data_source_entry(data_source: DataSourceSpec) -> dict[str, Any]:
    return {
        "name": data_source.name,
        "type": DATA_SOURCE_TYPE,
        "serviceRoleArn": DATA_SOURCE_ROLE_ARN,
        "lambdaConfig": {"functionArn": f"${{{data_source.backing_identity}.Arn}}"},
    }


def _set_if(entry: dict[str, Any], key: str, value: Any) -> None:
    if value is not None and value != "":
        entry[key] = value


def generate_manifest(
    operations: Iterable[OperationSpec],
    generated_at: datetime | None = None,
) -> str:
    """Generate manifest JSON with default settings."""
    return ManifestGenerator().render(operations, generated_at)
