"""
SDL Generator - Render the IR as GraphQL Schema Definition Language.

Output is deterministic: types, fields, enum values and operations are sorted
by name; union members keep their declaration order. Blocks are separated by
a single blank line and the document carries no leading or trailing
whitespace.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Sequence
from typing import assert_never

from graphql import GraphQLSyntaxError, parse

from ..core.errors import make_generation_error
from ..core.ir import (
    ROOT_TYPE_ORDER,
    AppliedDirective,
    ArgumentSpec,
    DirectiveValue,
    EnumValueSpec,
    FieldSpec,
    OperationSpec,
    RootType,
    SchemaSpec,
    TypeKind,
    TypeSpec,
)

logger = logging.getLogger(__name__)

INDENT = "  "

_TYPE_KEYWORDS: dict[TypeKind, str] = {
    TypeKind.OBJECT: "type",
    TypeKind.INPUT: "input",
    TypeKind.INTERFACE: "interface",
}


class SDLGenerator:
    """
    Render types and operations into a single SDL document.

    Example:
        sdl = SDLGenerator().render(schema.types, schema.operations)
    """

    def render(
        self,
        types: Iterable[TypeSpec],
        operations: Iterable[OperationSpec],
        description: str | None = None,
    ) -> str:
        """
        Generate the SDL text.

        Args:
            types: Named non-root types
            operations: Root operation fields
            description: Optional description placed above the schema block

        Returns:
            SDL document text
        """
        operations = list(operations)
        blocks: list[list[str]] = []

        roots = self._present_roots(operations)
        if roots:
            blocks.append(self._render_schema_block(roots, description))

        for type_spec in sorted(types, key=lambda t: t.name):
            blocks.append(self._render_type(type_spec))

        for root in roots:
            root_ops = [op for op in operations if op.root_type == root]
            blocks.append(self._render_root_type(root, root_ops))

        return "\n\n".join("\n".join(block) for block in blocks).strip()

    def render_schema(self, schema: SchemaSpec, description: str | None = None) -> str:
        """Render a whole SchemaSpec; ``description`` overrides the schema's own."""
        return self.render(schema.types, schema.operations, description or schema.description)

    # -------------------------------------------------------------------------
    # Schema block
    # -------------------------------------------------------------------------

    def _present_roots(self, operations: Sequence[OperationSpec]) -> list[RootType]:
        present = {op.root_type for op in operations}
        return [root for root in ROOT_TYPE_ORDER if root in present]

    def _render_schema_block(self, roots: list[RootType], description: str | None) -> list[str]:
        lines = self._description(description, "")
        lines.append("schema {")
        for root in roots:
            lines.append(f"{INDENT}{root.value.lower()}: {root.value}")
        lines.append("}")
        return lines

    # -------------------------------------------------------------------------
    # Named types
    # -------------------------------------------------------------------------

    def _render_type(self, type_spec: TypeSpec) -> list[str]:
        lines = self._description(type_spec.description, "")

        match type_spec.kind:
            case TypeKind.OBJECT | TypeKind.INPUT | TypeKind.INTERFACE:
                lines.extend(self._render_fielded_type(type_spec))
            case TypeKind.ENUM:
                lines.extend(self._render_enum_type(type_spec))
            case TypeKind.UNION:
                lines.extend(self._render_union_type(type_spec))
            case _:
                assert_never(type_spec.kind)

        return lines

    def _render_fielded_type(self, type_spec: TypeSpec) -> list[str]:
        keyword = _TYPE_KEYWORDS[type_spec.kind]
        header = f"{keyword} {type_spec.name}{format_directives(type_spec.directives)}"
        if not type_spec.fields:
            return [header]

        lines = [f"{header} {{"]
        for field in sorted(type_spec.fields, key=lambda f: f.name):
            lines.extend(self._render_field(field))
        lines.append("}")
        return lines

    def _render_field(self, field: FieldSpec) -> list[str]:
        lines = self._description(field.description, INDENT)
        line = f"{INDENT}{field.name}: {format_type(field.type, field.is_nullable)}"
        line += format_directives(field.directives)
        if field.is_deprecated:
            line += format_deprecated(field.deprecation_reason)
        lines.append(line)
        return lines

    def _render_enum_type(self, type_spec: TypeSpec) -> list[str]:
        # AppSync rejects directives on enum declarations; never emit them.
        if type_spec.directives:
            logger.debug(
                "Dropping %d directive(s) from enum %s",
                len(type_spec.directives),
                type_spec.name,
            )
        header = f"enum {type_spec.name}"
        if not type_spec.enum_values:
            return [header]

        lines = [f"{header} {{"]
        for value in sorted(type_spec.enum_values, key=lambda v: v.name):
            lines.extend(self._render_enum_value(value))
        lines.append("}")
        return lines

    def _render_enum_value(self, value: EnumValueSpec) -> list[str]:
        lines = self._description(value.description, INDENT)
        line = f"{INDENT}{value.name}"
        if value.is_deprecated:
            line += format_deprecated(value.deprecation_reason)
        lines.append(line)
        return lines

    def _render_union_type(self, type_spec: TypeSpec) -> list[str]:
        header = f"union {type_spec.name}{format_directives(type_spec.directives)}"
        if not type_spec.union_members:
            return [header]
        return [f"{header} = {' | '.join(type_spec.union_members)}"]

    # -------------------------------------------------------------------------
    # Root operation types
    # -------------------------------------------------------------------------

    def _render_root_type(self, root: RootType, operations: list[OperationSpec]) -> list[str]:
        lines = [f"type {root.value} {{"]
        for op in sorted(operations, key=lambda o: o.field_name):
            lines.extend(self._description(op.description, INDENT))
            signature = f"{INDENT}{op.field_name}"
            arg_lines = self._render_arguments(op.arguments)
            if len(arg_lines) == 1:
                signature += arg_lines[0]
            elif arg_lines:
                lines.append(signature + arg_lines[0])
                lines.extend(arg_lines[1:-1])
                signature = arg_lines[-1]
            signature += f": {op.return_type}{format_directives(op.directives)}"
            lines.append(signature)
        lines.append("}")
        return lines

    def _render_arguments(self, arguments: list[ArgumentSpec]) -> list[str]:
        """
        Render an argument list.

        Returns one line (``(a: Int!, b: String)``) when no argument carries a
        description, otherwise the opening paren, one line per argument with
        its description block, and the closing line.
        """
        if not arguments:
            return []
        if not any(arg.description for arg in arguments):
            return ["(" + ", ".join(_format_argument(arg) for arg in arguments) + ")"]

        nested = INDENT * 2
        lines = ["("]
        for i, arg in enumerate(arguments):
            lines.extend(self._description(arg.description, nested))
            comma = "," if i < len(arguments) - 1 else ""
            lines.append(f"{nested}{_format_argument(arg)}{comma}")
        lines.append(f"{INDENT})")
        return lines

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _description(self, text: str | None, indent: str) -> list[str]:
        """Block-string description lines, or nothing when there is no text."""
        if not text:
            return []
        body = text.replace('"""', '\\"""').splitlines()
        return [f'{indent}"""', *(f"{indent}{line}" if line else "" for line in body), f'{indent}"""']


def format_type(type_name: str, is_nullable: bool) -> str:
    """Append ``!`` for non-null types."""
    return type_name if is_nullable else f"{type_name}!"


def format_deprecated(reason: str | None) -> str:
    """``@deprecated(reason: "...")``, or ``@deprecated()`` without a reason."""
    if reason:
        return f" @deprecated(reason: {_quote(reason)})"
    return " @deprecated()"


def format_directives(directives: Iterable[AppliedDirective]) -> str:
    """Format directives as SDL, each preceded by a space."""
    parts = []
    for directive in directives:
        text = f" @{directive.name}"
        if directive.arguments:
            args = ", ".join(
                f"{name}: {format_directive_value(value)}"
                for name, value in directive.arguments.items()
            )
            text += f"({args})"
        parts.append(text)
    return "".join(parts)


def format_directive_value(value: DirectiveValue) -> str:
    """Render a literal directive argument value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(_quote(item) for item in value) + "]"
    return _quote(value)


def _format_argument(arg: ArgumentSpec) -> str:
    text = f"{arg.name}: {format_type(arg.type, arg.is_nullable)}"
    if arg.default_value is not None:
        text += f" = {arg.default_value}"
    return text


def _quote(value: str) -> str:
    # JSON string escapes are a subset of GraphQL string escapes.
    return json.dumps(value)


_EMPTY_ARGUMENTS = re.compile(r"\(\s*\)")


def validate_sdl(sdl: str) -> None:
    """
    Check that the SDL is syntactically valid GraphQL.

    AppSync accepts ``@deprecated()`` with an empty argument list, which the
    reference grammar does not, so empty argument lists are removed before
    parsing.

    Raises:
        GenerationError: On a syntax error
    """
    if not sdl.strip():
        return
    try:
        parse(_EMPTY_ARGUMENTS.sub("", sdl), no_location=True)
    except GraphQLSyntaxError as e:
        raise make_generation_error(f"Generated SDL is not valid GraphQL: {e.message}") from e


def generate_sdl(schema: SchemaSpec, description: str | None = None) -> str:
    """
    Generate GraphQL SDL from a SchemaSpec.

    Args:
        schema: IR snapshot
        description: Optional schema description

    Returns:
        GraphQL SDL string
    """
    return SDLGenerator().render_schema(schema, description)
