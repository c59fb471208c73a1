"""
AWS AppSync scalar registry.

Maps well-known semantic source types to AppSync custom scalars. Keys are
fully-qualified source type names; both .NET and Python spellings of the same
concept are registered so either extractor can feed the resolver.

Integer epoch timestamps are not registered: a long is only an
``AWSTimestamp`` when the field carries an explicit scalar override.
"""

from __future__ import annotations

from types import MappingProxyType

AWS_DATE = "AWSDate"
AWS_TIME = "AWSTime"
AWS_DATETIME = "AWSDateTime"
AWS_TIMESTAMP = "AWSTimestamp"
AWS_EMAIL = "AWSEmail"
AWS_JSON = "AWSJSON"
AWS_PHONE = "AWSPhone"
AWS_URL = "AWSURL"
AWS_IP_ADDRESS = "AWSIPAddress"

SUPPORTED_AWS_SCALARS: tuple[str, ...] = (
    AWS_DATE,
    AWS_TIME,
    AWS_DATETIME,
    AWS_TIMESTAMP,
    AWS_EMAIL,
    AWS_JSON,
    AWS_PHONE,
    AWS_URL,
    AWS_IP_ADDRESS,
)

SCALAR_MAPPINGS: MappingProxyType[str, str] = MappingProxyType(
    {
        # Point in time
        "System.DateTime": AWS_DATETIME,
        "System.DateTimeOffset": AWS_DATETIME,
        "datetime.datetime": AWS_DATETIME,
        # Calendar date / wall-clock time
        "System.DateOnly": AWS_DATE,
        "datetime.date": AWS_DATE,
        "System.TimeOnly": AWS_TIME,
        "datetime.time": AWS_TIME,
        # Identifiers
        "System.Guid": "ID",
        "uuid.UUID": "ID",
        # Opaque JSON
        "System.Text.Json.JsonElement": AWS_JSON,
        "System.Text.Json.Nodes.JsonNode": AWS_JSON,
        "Newtonsoft.Json.Linq.JObject": AWS_JSON,
        "Newtonsoft.Json.Linq.JToken": AWS_JSON,
        "typing.Any": AWS_JSON,
        # Email and URL
        "System.Net.Mail.MailAddress": AWS_EMAIL,
        "email.headerregistry.Address": AWS_EMAIL,
        "pydantic.EmailStr": AWS_EMAIL,
        "System.Uri": AWS_URL,
        "pydantic.AnyUrl": AWS_URL,
        "pydantic.HttpUrl": AWS_URL,
        # IP addresses
        "System.Net.IPAddress": AWS_IP_ADDRESS,
        "ipaddress.IPv4Address": AWS_IP_ADDRESS,
        "ipaddress.IPv6Address": AWS_IP_ADDRESS,
    }
)


def get_aws_scalar(source_type_name: str) -> str | None:
    """
    Get the AppSync scalar for a fully-qualified source type name.

    Args:
        source_type_name: e.g. ``System.DateTime`` or ``datetime.date``

    Returns:
        Scalar name, or None if the type has no registered mapping
    """
    return SCALAR_MAPPINGS.get(source_type_name)


def source_types_for(scalar: str) -> list[str]:
    """All registered source type names that map to ``scalar``."""
    return sorted(name for name, target in SCALAR_MAPPINGS.items() if target == scalar)
