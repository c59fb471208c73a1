"""
Type declarations for lambda-graphql IR.

A TypeSpec is one named, non-root GraphQL type: an object, input object,
interface, enum or union. Field types arrive already resolved to GraphQL
output names (see ``lambda_graphql.core.type_resolver``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .directives import AppliedDirective


class TypeKind(StrEnum):
    """Kinds of named types the SDL emitter can render."""

    OBJECT = "object"
    INPUT = "input"
    INTERFACE = "interface"
    ENUM = "enum"
    UNION = "union"


class FieldSpec(BaseModel):
    """
    A field on an object, input or interface type.

    Attributes:
        name: GraphQL field name
        type: Resolved output type name without the non-null suffix
            (``String``, ``Product``, ``[Product]``)
        is_nullable: Rendered without ``!`` when True
        is_deprecated: Adds ``@deprecated`` after the field
        deprecation_reason: Optional reason for ``@deprecated(reason: ...)``
    """

    name: str
    type: str
    description: str | None = None
    is_nullable: bool = True
    is_deprecated: bool = False
    deprecation_reason: str | None = None
    directives: list[AppliedDirective] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class EnumValueSpec(BaseModel):
    """A single value within an enum type."""

    name: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None

    model_config = ConfigDict(frozen=True)


class TypeSpec(BaseModel):
    """
    A named GraphQL type.

    Exactly one member collection is meaningful for a given kind:
    ``fields`` for object/input/interface, ``enum_values`` for enums and
    ``union_members`` for unions. Populating any other collection is rejected.
    """

    name: str
    kind: TypeKind = TypeKind.OBJECT
    description: str | None = None
    fields: list[FieldSpec] = Field(default_factory=list)
    enum_values: list[EnumValueSpec] = Field(default_factory=list)
    union_members: list[str] = Field(default_factory=list)
    directives: list[AppliedDirective] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: object) -> object:
        """Accept ``Object`` and ``OBJECT`` as well as ``object``."""
        return v.lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_members_match_kind(self) -> TypeSpec:
        populated = {
            "fields": bool(self.fields),
            "enum_values": bool(self.enum_values),
            "union_members": bool(self.union_members),
        }
        match self.kind:
            case TypeKind.OBJECT | TypeKind.INPUT | TypeKind.INTERFACE:
                allowed = "fields"
            case TypeKind.ENUM:
                allowed = "enum_values"
            case TypeKind.UNION:
                allowed = "union_members"
        extra = [name for name, present in populated.items() if present and name != allowed]
        if extra:
            raise ValueError(
                f"{self.kind.value} type '{self.name}' cannot declare {', '.join(extra)}"
            )
        return self
