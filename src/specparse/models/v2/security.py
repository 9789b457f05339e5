"""Security Scheme Object (Swagger 2.0)."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Node, data_key, expect_map
from specparse.validation import check_enum, check_format, check_required, check_type

SCHEME_TYPES = ("basic", "apiKey", "oauth2")
API_KEY_LOCATIONS = ("query", "header")
OAUTH2_FLOWS = ("implicit", "password", "application", "accessCode")

# Flow -> URLs that flow must declare.
FLOW_URLS = {
    "implicit": ("authorizationUrl",),
    "password": ("tokenUrl",),
    "application": ("tokenUrl",),
    "accessCode": ("authorizationUrl", "tokenUrl"),
}


class SecurityScheme(Node):
    """A ``securityDefinitions`` entry.

    There is no ``flows`` object in 2.0; an oauth2 scheme declares a single
    ``flow`` with its URLs and ``scopes`` inline.
    """

    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    flow: Optional[str] = None
    authorization_url: Optional[str] = Field(default=None, alias="authorizationUrl")
    token_url: Optional[str] = Field(default=None, alias="tokenUrl")
    scopes: Optional[dict[str, str]] = None

    @classmethod
    def from_raw(cls, data: Any) -> SecurityScheme:
        data = normalize_shallow(expect_map(data, "security scheme"))
        scopes = data.get(Key.SCOPES)
        if isinstance(scopes, dict):
            scopes = {data_key(key): value for key, value in scopes.items()}
        return cls.model_construct(
            type=data.get(Key.TYPE),
            description=data.get(Key.DESCRIPTION),
            name=data.get(Key.NAME),
            location=data.get(Key.IN),
            flow=data.get(Key.FLOW),
            authorization_url=data.get(Key.AUTHORIZATION_URL),
            token_url=data.get(Key.TOKEN_URL),
            scopes=scopes,
        )

    def check(self, context: str = "securityScheme") -> None:
        check_required({"type": self.type}, context)
        check_enum(self.type, SCHEME_TYPES, f"{context}.type")
        check_type(self.description, "string", f"{context}.description")

        if self.type == "apiKey":
            if self.name is None:
                raise SpecValidationError(context, "name is required for apiKey security scheme")
            if self.location is None:
                raise SpecValidationError(
                    context, "in (location) is required for apiKey security scheme"
                )
            check_type(self.name, "string", f"{context}.name")
            check_enum(self.location, API_KEY_LOCATIONS, f"{context}.in")
        elif self.type == "oauth2":
            if self.flow is None:
                raise SpecValidationError(context, "flow is required for oauth2 security scheme")
            check_enum(self.flow, OAUTH2_FLOWS, f"{context}.flow")
            urls = {"authorizationUrl": self.authorization_url, "tokenUrl": self.token_url}
            check_required({name: urls[name] for name in FLOW_URLS[self.flow]}, context)
            check_required({"scopes": self.scopes}, context)
            for name, value in urls.items():
                check_type(value, "string", f"{context}.{name}")
                check_format(value, "url", f"{context}.{name}")
            check_type(self.scopes, "map", f"{context}.scopes")
            if isinstance(self.scopes, dict):
                for name, description in self.scopes.items():
                    check_type(description, "string", f"{context}.scopes.{name}")
