"""
IR document loader.

Reads a YAML or JSON description of types and operations and builds the IR
snapshot the generators consume. This is the extraction boundary: each type
and operation is extracted on its own, and an entity that cannot be extracted
is reported as a diagnostic and left out while the rest of the document
proceeds.

Fields and arguments may carry either an already-resolved ``type`` or a
``source`` descriptor. Operations may carry a ``return_type``, a
``source_return`` descriptor, or both (declared name plus actual shape).

Example document:

    types:
      - name: Product
        kind: object
        fields:
          - {name: id, type: ID, is_nullable: false}
          - name: createdAt
            source: {name: System.DateTime}
    operations:
      - root_type: Query
        field_name: getProduct
        source_return:
          name: System.Threading.Tasks.Task
          type_arguments: [{name: MyApp.Product, non_null: true}]
        data_source: ProductsLambda
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .diagnostics import Diagnostic, DiagnosticBag, DiagnosticCode, Failed, Ok, Result, Severity
from .errors import ErrorContext, IRValidationError, make_load_error
from .ir import OperationSpec, RootType, SchemaSpec, TypeSpec
from .type_resolver import ReturnTypeResolver, SourceType, TypeNameCache, TypeResolver

logger = logging.getLogger(__name__)

FALLBACK_RETURN_TYPE = "String"


@dataclass
class ExtractionReport:
    """The IR snapshot built from a document plus everything that went wrong."""

    schema: SchemaSpec
    diagnostics: list[Diagnostic] = field(default_factory=list)
    source: Path | None = None

    @property
    def excluded_count(self) -> int:
        """Number of entities dropped from the IR."""
        return sum(1 for d in self.diagnostics if d.severity != Severity.INFO)


class _EntityError(Exception):
    """Internal signal: the entity being extracted cannot be used."""


def load_schema_document(path: Path, cache: TypeNameCache | None = None) -> ExtractionReport:
    """
    Load an IR document from disk.

    Args:
        path: YAML or JSON file
        cache: Optional shared type-name cache

    Returns:
        ExtractionReport with the schema and per-entity diagnostics

    Raises:
        LoadError: If the file is missing, unparseable, or not a mapping
    """
    if not path.exists():
        raise make_load_error(f"IR document not found: {path}", file=path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise make_load_error(f"Invalid YAML/JSON: {e}", file=path, line=line) from e

    if data is None:
        logger.warning(f"Empty IR document at {path}")
        data = {}
    if not isinstance(data, dict):
        raise make_load_error("IR document must be a mapping at the top level", file=path)

    report = load_schema_data(data, cache=cache)
    report.source = path
    return report


def load_schema_data(data: dict[str, Any], cache: TypeNameCache | None = None) -> ExtractionReport:
    """
    Build an IR snapshot from already-parsed document data.

    Raises:
        IRValidationError: If the merged snapshot is still inconsistent
    """
    resolver = TypeResolver(cache=cache if cache is not None else TypeNameCache())
    return_resolver = ReturnTypeResolver(resolver)
    bag = DiagnosticBag()

    types: list[TypeSpec] = []
    type_names: set[str] = set()
    for index, raw in enumerate(_top_level_list(data, "types")):
        location = f"types[{index}]"
        match extract_type(raw, location, resolver):
            case Ok(value=type_spec, notes=notes):
                bag.extend(notes)
                if type_spec.name in type_names:
                    bag.add(
                        _diagnostic(
                            DiagnosticCode.TYPE_EXTRACTION,
                            f"Duplicate type name '{type_spec.name}', keeping the first declaration",
                            location,
                            type_spec.name,
                        )
                    )
                    continue
                type_names.add(type_spec.name)
                types.append(type_spec)
            case Failed(diagnostics=diagnostics):
                bag.extend(diagnostics)

    operations: list[OperationSpec] = []
    operation_names: set[str] = set()
    for index, raw in enumerate(_top_level_list(data, "operations")):
        location = f"operations[{index}]"
        match extract_operation(raw, location, resolver, return_resolver):
            case Ok(value=operation, notes=notes):
                bag.extend(notes)
                if operation.qualified_name in operation_names:
                    bag.add(
                        _diagnostic(
                            DiagnosticCode.OPERATION_EXTRACTION,
                            f"Duplicate operation '{operation.qualified_name}', "
                            "keeping the first declaration",
                            location,
                            operation.qualified_name,
                        )
                    )
                    continue
                operation_names.add(operation.qualified_name)
                operations.append(operation)
            case Failed(diagnostics=diagnostics):
                bag.extend(diagnostics)

    for diagnostic in bag:
        if diagnostic.severity == Severity.INFO:
            logger.info(diagnostic.format())
        else:
            logger.warning(diagnostic.format())

    try:
        schema = SchemaSpec(types=types, operations=operations, description=data.get("description"))
    except ValidationError as e:
        raise IRValidationError(_summarize(e), ErrorContext(location="<schema>")) from e

    return ExtractionReport(schema=schema, diagnostics=list(bag))


def extract_type(raw: Any, location: str, resolver: TypeResolver) -> Result[TypeSpec]:
    """Extract one type declaration."""
    code = DiagnosticCode.TYPE_EXTRACTION
    name = raw.get("name") if isinstance(raw, dict) else None
    try:
        if not isinstance(raw, dict):
            raise _EntityError(f"expected a mapping, got {type(raw).__name__}")
        if isinstance(name, str) and name in {root.value for root in RootType}:
            raise _EntityError(f"'{name}' is reserved for a root operation type")

        data = dict(raw)
        if "fields" in data:
            data["fields"] = [
                _resolve_member(f, f"{location}.fields[{i}]", resolver)
                for i, f in enumerate(_as_list(data["fields"]))
            ]
        return Ok(TypeSpec.model_validate(data))
    except _EntityError as e:
        return Failed((_diagnostic(code, f"Failed to extract type: {e}", location, name),))
    except ValidationError as e:
        return Failed(
            (_diagnostic(code, f"Failed to extract type: {_summarize(e)}", location, name),)
        )


def extract_operation(
    raw: Any,
    location: str,
    resolver: TypeResolver,
    return_resolver: ReturnTypeResolver,
) -> Result[OperationSpec]:
    """Extract one root operation and its resolver settings."""
    code = DiagnosticCode.OPERATION_EXTRACTION
    name = raw.get("field_name") if isinstance(raw, dict) else None
    notes: list[Diagnostic] = []
    try:
        if not isinstance(raw, dict):
            raise _EntityError(f"expected a mapping, got {type(raw).__name__}")

        data = dict(raw)
        source_return = data.pop("source_return", None)
        declared = data.get("return_type")
        if declared is not None and not isinstance(declared, str):
            raise _EntityError(f"return_type must be a string, got {type(declared).__name__}")
        if source_return is not None:
            source = _parse_source(source_return, f"{location}.source_return")
            try:
                data["return_type"] = return_resolver.resolve(source, declared_type=declared)
            except ValueError as e:
                raise _EntityError(f"{location}.source_return: {e}") from e
        elif not declared:
            data["return_type"] = FALLBACK_RETURN_TYPE
            notes.append(
                Diagnostic(
                    code=DiagnosticCode.RETURN_TYPE_FALLBACK,
                    severity=Severity.INFO,
                    message=f"Could not extract return type for operation '{name}', "
                    f"using fallback type: {FALLBACK_RETURN_TYPE}",
                    location=location,
                    entity=name,
                )
            )

        if "arguments" in data:
            data["arguments"] = [
                _resolve_member(a, f"{location}.arguments[{i}]", resolver, default_nullable=False)
                for i, a in enumerate(_as_list(data["arguments"]))
            ]
        return Ok(OperationSpec.model_validate(data), notes=tuple(notes))
    except _EntityError as e:
        return Failed((_diagnostic(code, f"Failed to extract operation: {e}", location, name),))
    except ValidationError as e:
        return Failed(
            (_diagnostic(code, f"Failed to extract operation: {_summarize(e)}", location, name),)
        )


def _resolve_member(
    raw: Any,
    location: str,
    resolver: TypeResolver,
    default_nullable: bool = True,
) -> dict[str, Any]:
    """Turn a field/argument with a ``source`` descriptor into resolved form."""
    if not isinstance(raw, dict):
        raise _EntityError(f"{location}: expected a mapping, got {type(raw).__name__}")
    data = dict(raw)
    source_raw = data.pop("source", None)
    if source_raw is None:
        data.setdefault("is_nullable", default_nullable)
        return data

    try:
        resolved = resolver.resolve(_parse_source(source_raw, f"{location}.source"))
    except _EntityError:
        raise
    except ValueError as e:
        raise _EntityError(f"{location}.source: {e}") from e
    data.setdefault("type", resolved.name)
    # An explicit is_nullable in the document overrides the inferred one.
    data.setdefault("is_nullable", resolved.is_nullable)
    return data


def _parse_source(raw: Any, location: str) -> SourceType:
    if isinstance(raw, str):
        return SourceType(name=raw)
    try:
        return SourceType.model_validate(raw)
    except ValidationError as e:
        raise _EntityError(f"{location}: {_summarize(e)}") from e


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise _EntityError(f"expected a list, got {type(value).__name__}")


def _top_level_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise IRValidationError(
            f"'{key}' must be a list, got {type(value).__name__}", ErrorContext(location=key)
        )
    return value


def _diagnostic(
    code: DiagnosticCode, message: str, location: str, entity: str | None
) -> Diagnostic:
    return Diagnostic(
        code=code,
        severity=Severity.WARNING,
        message=message,
        location=location,
        entity=entity if isinstance(entity, str) else None,
    )


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)
