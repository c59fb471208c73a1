"""
Source type to GraphQL type resolution.

The extractor describes every field, argument and return value with a
language-neutral ``SourceType``. ``TypeResolver`` turns one into a GraphQL
output name plus a nullability flag; ``ReturnTypeResolver`` specialises that
for operation return values (async unwrapping, void handling, declared
overrides) and produces the final formatted string.

Resolution precedence, first match wins:

1. explicit scalar override on the field
2. AppSync scalar registry (fully-qualified name)
3. dictionary/map types -> AWSJSON
4. collections -> ``[Element]``
5. nullable value wrappers -> underlying type, forced nullable
6. built-in primitives (String, Int, Float, Boolean, ID)
7. the declared type's own simple name
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from . import scalars

logger = logging.getLogger(__name__)

PRIMITIVE_MAPPINGS: dict[str, str] = {
    # Text
    "System.String": "String",
    "string": "String",
    "System.Char": "String",
    "char": "String",
    "builtins.str": "String",
    "str": "String",
    # Integers
    "System.Int16": "Int",
    "short": "Int",
    "System.Int32": "Int",
    "int": "Int",
    "System.Int64": "Int",
    "long": "Int",
    "System.Byte": "Int",
    "byte": "Int",
    "builtins.int": "Int",
    # Floating point and decimal
    "System.Single": "Float",
    "float": "Float",
    "System.Double": "Float",
    "double": "Float",
    "System.Decimal": "Float",
    "decimal": "Float",
    "builtins.float": "Float",
    "decimal.Decimal": "Float",
    "Decimal": "Float",
    # Boolean
    "System.Boolean": "Boolean",
    "bool": "Boolean",
    "builtins.bool": "Boolean",
    # Identifiers
    "System.Guid": "ID",
    "Guid": "ID",
    "uuid.UUID": "ID",
    "UUID": "ID",
}

# Types that are non-null unless wrapped in a nullable wrapper. Python has no
# reference/value split, so its builtins and containers are treated as values:
# only Optional[...] makes them nullable.
VALUE_TYPE_NAMES: frozenset[str] = frozenset(
    {
        "System.Int16",
        "System.Int32",
        "System.Int64",
        "System.Byte",
        "System.Char",
        "System.Single",
        "System.Double",
        "System.Decimal",
        "System.Boolean",
        "System.Guid",
        "System.DateTime",
        "System.DateTimeOffset",
        "System.DateOnly",
        "System.TimeOnly",
        "short",
        "int",
        "long",
        "byte",
        "char",
        "float",
        "double",
        "decimal",
        "bool",
        "builtins.str",
        "builtins.int",
        "builtins.float",
        "builtins.bool",
        "builtins.list",
        "builtins.tuple",
        "builtins.set",
        "builtins.frozenset",
        "decimal.Decimal",
        "uuid.UUID",
        "datetime.datetime",
        "datetime.date",
        "datetime.time",
    }
)

ASYNC_WRAPPER_NAMES: frozenset[str] = frozenset(
    {
        "System.Threading.Tasks.Task",
        "System.Threading.Tasks.ValueTask",
        "typing.Awaitable",
        "typing.Coroutine",
        "collections.abc.Awaitable",
        "collections.abc.Coroutine",
        "asyncio.Future",
        "asyncio.Task",
    }
)

VOID_NAMES: frozenset[str] = frozenset(
    {"void", "System.Void", "None", "NoneType", "builtins.NoneType"}
)


class SourceType(BaseModel):
    """
    Language-neutral description of a declared source type.

    Attributes:
        name: Fully-qualified type name (``System.Int32``, ``datetime.date``,
            ``MyApp.Product``). For generics, the name without arguments.
        type_arguments: Generic arguments; the element for collections, the
            underlying type for nullable wrappers, the result for async wrappers
        is_collection: List/array/enumerable shaped
        is_dictionary: Map shaped
        is_nullable_wrapper: ``Nullable<T>`` / ``Optional[T]``
        is_value_type: Overrides the built-in value-type table when set
        non_null: Explicit non-null annotation from the extractor
        scalar_override: Explicit scalar annotation (e.g. ``AWSTimestamp``)
    """

    name: str
    type_arguments: tuple[SourceType, ...] = ()
    is_collection: bool = False
    is_dictionary: bool = False
    is_nullable_wrapper: bool = False
    is_value_type: bool | None = None
    non_null: bool = False
    scalar_override: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def inner(self) -> SourceType:
        """The first type argument (element, underlying or awaited type)."""
        if not self.type_arguments:
            raise ValueError(f"Type '{self.name}' has no type arguments")
        return self.type_arguments[0]

    @property
    def is_value_like(self) -> bool:
        if self.is_value_type is not None:
            return self.is_value_type
        return self.name in VALUE_TYPE_NAMES

    @property
    def cache_key(self) -> str:
        return self.model_dump_json()


class ResolvedType(NamedTuple):
    """A GraphQL type name and whether it may be null."""

    name: str
    is_nullable: bool

    def format(self) -> str:
        """Render with the non-null suffix (``Product!``) when required."""
        return self.name if self.is_nullable else f"{self.name}!"


class TypeNameCache:
    """
    Thread-safe memo of resolved source types.

    Owned and passed in by the caller; the resolver never keeps one of its own.
    Extractors may resolve types from several threads at once.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ResolvedType] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_resolve(
        self, source: SourceType, resolve: Callable[[SourceType], ResolvedType]
    ) -> ResolvedType:
        key = source.cache_key
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self.hits += 1
                return cached
        resolved = resolve(source)
        with self._lock:
            self.misses += 1
            # First writer wins.
            return self._entries.setdefault(key, resolved)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class TypeResolver:
    """
    Resolve source types to GraphQL output types.

    Example:
        resolver = TypeResolver()
        resolver.resolve(SourceType(name="System.Int32"))
        # ResolvedType(name="Int", is_nullable=False)
    """

    def __init__(self, cache: TypeNameCache | None = None) -> None:
        self.cache = cache

    def resolve(self, source: SourceType) -> ResolvedType:
        if self.cache is not None:
            return self.cache.get_or_resolve(source, self._resolve)
        return self._resolve(source)

    def is_nullable(self, source: SourceType) -> bool:
        """
        Nullability of the outer type only.

        Value-like types are non-null unless wrapped; reference-like types are
        nullable unless annotated non-null. An explicit non-null annotation wins.
        """
        if source.non_null:
            return False
        if source.is_nullable_wrapper or source.is_dictionary:
            return True
        return not source.is_value_like

    def _resolve(self, source: SourceType) -> ResolvedType:
        nullable = self.is_nullable(source)

        if source.scalar_override:
            return ResolvedType(source.scalar_override, nullable)

        aws_scalar = scalars.get_aws_scalar(source.name)
        if aws_scalar is not None:
            return ResolvedType(aws_scalar, nullable)

        if source.is_dictionary:
            return ResolvedType(scalars.AWS_JSON, nullable)

        if source.is_collection:
            element = self._resolve(source.inner)
            return ResolvedType(f"[{element.name}]", nullable)

        if source.is_nullable_wrapper:
            underlying = self._resolve(source.inner)
            return ResolvedType(underlying.name, True)

        primitive = PRIMITIVE_MAPPINGS.get(source.name) or PRIMITIVE_MAPPINGS.get(
            source.simple_name
        )
        if primitive is not None:
            return ResolvedType(primitive, nullable)

        return ResolvedType(source.simple_name, nullable)


class ReturnTypeResolver:
    """
    Resolve operation return types to formatted GraphQL type strings.

    Unwraps one level of async wrapper, maps "no value" to ``Boolean!`` and
    otherwise defers to ``TypeResolver``.
    """

    def __init__(self, type_resolver: TypeResolver | None = None) -> None:
        self.type_resolver = type_resolver or TypeResolver()

    def resolve(self, source: SourceType, declared_type: str | None = None) -> str:
        """
        Get the formatted return type, e.g. ``Product!``, ``String`` or ``[Product]!``.

        Args:
            source: The method's actual return type
            declared_type: Caller-declared GraphQL type. Replaces the inferred
                name, but list wrapping and nullability still follow ``source``.
                Used verbatim when it already carries ``[]``; a trailing ``!``
                keeps the outer type non-null.
        """
        actual = self.unwrap(source)
        if actual is None:
            return "Boolean!"

        if declared_type:
            return self._apply_declared(actual, declared_type)

        return self.type_resolver.resolve(actual).format()

    def unwrap(self, source: SourceType) -> SourceType | None:
        """
        Strip a single async wrapper.

        Returns:
            The awaited type, or None when the operation produces no value
        """
        if source.name in ASYNC_WRAPPER_NAMES:
            if not source.type_arguments:
                return None
            # Coroutine[YieldT, SendT, ReturnT] carries the result last.
            source = source.type_arguments[-1]
        if source.name in VOID_NAMES:
            return None
        return source

    def _apply_declared(self, actual: SourceType, declared_type: str) -> str:
        declared_type = declared_type.strip()
        if declared_type.startswith("["):
            return declared_type

        declared_non_null = declared_type.endswith("!")
        base = declared_type.removesuffix("!")
        shape = actual.inner if actual.is_nullable_wrapper and actual.type_arguments else actual
        name = f"[{base}]" if shape.is_collection else base
        nullable = self.type_resolver.is_nullable(actual) and not declared_non_null
        if shape.is_collection:
            logger.debug("Wrapping declared return type %s as list %s", declared_type, name)
        return ResolvedType(name, nullable).format()
