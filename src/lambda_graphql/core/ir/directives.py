"""
Applied directives for lambda-graphql IR.

Directives are schema metadata only (e.g. ``@aws_cognito_user_pools``);
the engine never interprets them.
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DirectiveValue = str | bool | int | float | list[str]


class AppliedDirective(BaseModel):
    """
    A directive application on a type, field or operation.

    Attributes:
        name: Directive name without the leading ``@``
        arguments: Argument name to literal value. Lists render as list literals.
    """

    name: str
    arguments: dict[str, DirectiveValue] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def strip_at(cls, v: str) -> str:
        """Accept ``@name`` as well as ``name``."""
        v = v.removeprefix("@")
        if not v.isidentifier():
            raise ValueError(f"Directive name '{v}' is not a valid identifier")
        return v

    @field_validator("arguments")
    @classmethod
    def finite_numbers(cls, v: dict[str, DirectiveValue]) -> dict[str, DirectiveValue]:
        """GraphQL has no literal for infinity or NaN."""
        for key, value in v.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"Directive argument '{key}' must be a finite number")
        return v


class AuthMode(StrEnum):
    """AppSync authorization modes and the directive each one emits."""

    API_KEY = "aws_api_key"
    USER_POOLS = "aws_cognito_user_pools"
    IAM = "aws_iam"
    OPENID_CONNECT = "aws_oidc"
    LAMBDA = "aws_lambda"


def auth_directive(mode: AuthMode, cognito_groups: list[str] | None = None) -> AppliedDirective:
    """Build the AppSync auth directive for ``mode``."""
    arguments: dict[str, DirectiveValue] = {}
    if cognito_groups and mode == AuthMode.USER_POOLS:
        arguments["cognito_groups"] = list(cognito_groups)
    return AppliedDirective(name=mode.value, arguments=arguments)
