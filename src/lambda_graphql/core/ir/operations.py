"""
Operation (resolver) declarations for lambda-graphql IR.

An OperationSpec is one field on a root type (Query, Mutation or
Subscription) together with the resolver that serves it. Unit resolvers call
a single data source; pipeline resolvers run an ordered chain of functions.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .directives import AppliedDirective


class RootType(StrEnum):
    """Root operation types, in schema order."""

    QUERY = "Query"
    MUTATION = "Mutation"
    SUBSCRIPTION = "Subscription"


ROOT_TYPE_ORDER: tuple[RootType, ...] = (RootType.QUERY, RootType.MUTATION, RootType.SUBSCRIPTION)


class ResolverKind(StrEnum):
    """AppSync resolver kinds."""

    UNIT = "UNIT"
    PIPELINE = "PIPELINE"


class ArgumentSpec(BaseModel):
    """A field argument on a root operation."""

    name: str
    type: str
    description: str | None = None
    is_nullable: bool = False
    default_value: str | None = None

    model_config = ConfigDict(frozen=True)


class DeploymentSpec(BaseModel):
    """
    Deployment-only metadata carried through to the manifest.

    The engine never interprets these values; downstream deployment tooling
    reads them to create the backing Lambda functions and resolvers.
    """

    lambda_function_name: str | None = None
    lambda_function_logical_id: str | None = None
    runtime: str = "APPSYNC_JS"
    request_mapping: str | None = None
    response_mapping: str | None = None
    resource_name: str | None = None
    memory_size: int | None = Field(default=None, ge=128, le=10240)
    timeout: int | None = Field(default=None, ge=1, le=900)
    policies: list[str] = Field(default_factory=list)
    role: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def backing_identity(self) -> str | None:
        """Logical id of the backing function, derived from the name when not given."""
        if self.lambda_function_logical_id:
            return self.lambda_function_logical_id
        if self.lambda_function_name:
            return f"{self.lambda_function_name}Function"
        return None


class OperationSpec(BaseModel):
    """
    A root operation field and its resolver.

    Attributes:
        root_type: Query, Mutation or Subscription
        field_name: Field name on the root type
        return_type: Fully formatted return type (``Product!``, ``[Product]``)
        arguments: Arguments in declaration order
        resolver_kind: UNIT or PIPELINE
        data_source: Data source name, required for UNIT resolvers only
        functions: Ordered pipeline function names, required for PIPELINE only
    """

    root_type: RootType
    field_name: str
    return_type: str
    description: str | None = None
    arguments: list[ArgumentSpec] = Field(default_factory=list)
    resolver_kind: ResolverKind = ResolverKind.UNIT
    data_source: str | None = None
    functions: list[str] = Field(default_factory=list)
    directives: list[AppliedDirective] = Field(default_factory=list)
    deployment: DeploymentSpec = Field(default_factory=DeploymentSpec)

    model_config = ConfigDict(frozen=True)

    @field_validator("root_type", mode="before")
    @classmethod
    def normalize_root_type(cls, v: object) -> object:
        return v.capitalize() if isinstance(v, str) else v

    @field_validator("resolver_kind", mode="before")
    @classmethod
    def normalize_resolver_kind(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_resolver_shape(self) -> OperationSpec:
        match self.resolver_kind:
            case ResolverKind.UNIT:
                if not self.data_source:
                    raise ValueError(f"Unit resolver '{self.field_name}' requires a data_source")
                if self.functions:
                    raise ValueError(
                        f"Unit resolver '{self.field_name}' cannot declare pipeline functions"
                    )
            case ResolverKind.PIPELINE:
                if not self.functions:
                    raise ValueError(
                        f"Pipeline resolver '{self.field_name}' requires at least one function"
                    )
                if self.data_source:
                    raise ValueError(
                        f"Pipeline resolver '{self.field_name}' cannot declare a data_source"
                    )
        return self

    @property
    def qualified_name(self) -> str:
        return f"{self.root_type.value}.{self.field_name}"


class DataSourceSpec(BaseModel):
    """A deduplicated data source derived from unit resolvers."""

    name: str
    backing_identity: str

    model_config = ConfigDict(frozen=True)
