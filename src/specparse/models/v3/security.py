"""SecurityScheme, OAuthFlows and OAuthFlow objects (OpenAPI 3.x)."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from specparse.exceptions import SpecValidationError
from specparse.keys import Key, normalize_shallow
from specparse.models.base import Node, SpecVersion, build_optional, data_key, expect_map
from specparse.validation import check_enum, check_format, check_required, check_type

API_KEY_LOCATIONS = ("query", "header", "cookie")

# Flow name -> URLs that flow must declare.
FLOW_URLS = {
    "implicit": ("authorizationUrl",),
    "password": ("tokenUrl",),
    "clientCredentials": ("tokenUrl",),
    "authorizationCode": ("authorizationUrl", "tokenUrl"),
}


class OAuthFlow(Node):
    authorization_url: Optional[str] = Field(default=None, alias="authorizationUrl")
    token_url: Optional[str] = Field(default=None, alias="tokenUrl")
    refresh_url: Optional[str] = Field(default=None, alias="refreshUrl")
    scopes: Optional[dict[str, str]] = None

    @classmethod
    def from_raw(cls, data: Any) -> OAuthFlow:
        data = normalize_shallow(expect_map(data, "oauth flow"))
        scopes = data.get(Key.SCOPES)
        if isinstance(scopes, dict):
            scopes = {data_key(key): value for key, value in scopes.items()}
        return cls.model_construct(
            authorization_url=data.get(Key.AUTHORIZATION_URL),
            token_url=data.get(Key.TOKEN_URL),
            refresh_url=data.get(Key.REFRESH_URL),
            scopes=scopes,
        )

    def check(self, context: str = "oauthFlow", required_urls: tuple[str, ...] = ()) -> None:
        """Validate the flow.

        Args:
            context: Breadcrumb path of this flow.
            required_urls: Document names of the URL fields this kind of
                flow must declare (see ``FLOW_URLS``).
        """
        urls = {
            "authorizationUrl": self.authorization_url,
            "tokenUrl": self.token_url,
            "refreshUrl": self.refresh_url,
        }
        check_required({name: urls[name] for name in required_urls}, context)
        check_required({"scopes": self.scopes}, context)
        for name, value in urls.items():
            check_type(value, "string", f"{context}.{name}")
            check_format(value, "url", f"{context}.{name}")
        check_type(self.scopes, "map", f"{context}.scopes")
        if isinstance(self.scopes, dict):
            for name, description in self.scopes.items():
                check_type(description, "string", f"{context}.scopes.{name}")


class OAuthFlows(Node):
    implicit: Optional[OAuthFlow] = None
    password: Optional[OAuthFlow] = None
    client_credentials: Optional[OAuthFlow] = Field(default=None, alias="clientCredentials")
    authorization_code: Optional[OAuthFlow] = Field(default=None, alias="authorizationCode")

    @classmethod
    def from_raw(cls, data: Any) -> OAuthFlows:
        data = normalize_shallow(expect_map(data, "flows"))
        return cls.model_construct(
            implicit=build_optional(data.get(Key.IMPLICIT), OAuthFlow.from_raw),
            password=build_optional(data.get(Key.PASSWORD), OAuthFlow.from_raw),
            client_credentials=build_optional(data.get(Key.CLIENT_CREDENTIALS), OAuthFlow.from_raw),
            authorization_code=build_optional(data.get(Key.AUTHORIZATION_CODE), OAuthFlow.from_raw),
        )

    def check(self, context: str = "oauthFlows") -> None:
        flows = {
            "implicit": self.implicit,
            "password": self.password,
            "clientCredentials": self.client_credentials,
            "authorizationCode": self.authorization_code,
        }
        for name, flow in flows.items():
            if flow is not None:
                flow.check(f"{context}.{name}", FLOW_URLS[name])


class SecurityScheme(Node):
    """How an API is secured.

    ``type`` selects which other fields are required: ``name`` and ``in`` for
    apiKey, ``scheme`` for http, ``flows`` for oauth2 and
    ``openIdConnectUrl`` for openIdConnect. ``mutualTLS`` is OpenAPI 3.1 only.
    """

    dialect: SpecVersion = Field(default=SpecVersion.OPENAPI_3_1, exclude=True)

    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(default=None, alias="bearerFormat")
    flows: Optional[OAuthFlows] = None
    open_id_connect_url: Optional[str] = Field(default=None, alias="openIdConnectUrl")

    @classmethod
    def from_raw(
        cls, data: Any, dialect: SpecVersion = SpecVersion.OPENAPI_3_1
    ) -> SecurityScheme:
        data = normalize_shallow(expect_map(data, "security scheme"))
        return cls.model_construct(
            dialect=dialect,
            type=data.get(Key.TYPE),
            description=data.get(Key.DESCRIPTION),
            name=data.get(Key.NAME),
            location=data.get(Key.IN),
            scheme=data.get(Key.SCHEME),
            bearer_format=data.get(Key.BEARER_FORMAT),
            flows=build_optional(data.get(Key.FLOWS), OAuthFlows.from_raw),
            open_id_connect_url=data.get(Key.OPEN_ID_CONNECT_URL),
        )

    @property
    def allowed_types(self) -> tuple[str, ...]:
        types = ("apiKey", "http", "oauth2", "openIdConnect")
        if self.dialect is SpecVersion.OPENAPI_3_1:
            types += ("mutualTLS",)
        return types

    def check(self, context: str = "securityScheme") -> None:
        check_required({"type": self.type}, context)
        check_enum(self.type, self.allowed_types, f"{context}.type")
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
        elif self.type == "http":
            if self.scheme is None:
                raise SpecValidationError(context, "scheme is required for http security scheme")
            check_type(self.scheme, "string", f"{context}.scheme")
            check_type(self.bearer_format, "string", f"{context}.bearerFormat")
        elif self.type == "oauth2":
            if self.flows is None:
                raise SpecValidationError(context, "flows is required for oauth2 security scheme")
            self.flows.check(f"{context}.flows")
        elif self.type == "openIdConnect":
            if self.open_id_connect_url is None:
                raise SpecValidationError(
                    context, "openIdConnectUrl is required for openIdConnect security scheme"
                )
            check_type(self.open_id_connect_url, "string", f"{context}.openIdConnectUrl")
            check_format(self.open_id_connect_url, "url", f"{context}.openIdConnectUrl")
