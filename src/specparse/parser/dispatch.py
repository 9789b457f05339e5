"""Dialect detection and root construction.

Detection is a priority-ordered discriminator over the top-level marker
fields: ``swagger`` is inspected first, then ``openapi``. Each detected
:class:`~specparse.models.base.SpecVersion` owns its own construction path.
"""

from __future__ import annotations

import logging
from typing import Any

from specparse.exceptions import UnsupportedVersionError
from specparse.models.base import SpecVersion
from specparse.models.document import RootDocument
from specparse.models.v2.document import SwaggerDocument
from specparse.models.v3.document import OpenAPI30Document, OpenAPI31Document

logger = logging.getLogger(__name__)

DOCUMENT_CLASSES = {
    SpecVersion.SWAGGER_2_0: SwaggerDocument,
    SpecVersion.OPENAPI_3_0: OpenAPI30Document,
    SpecVersion.OPENAPI_3_1: OpenAPI31Document,
}


def detect_version(data: dict[str, Any]) -> SpecVersion:
    """Return the dialect declared by *data*'s top-level marker.

    ``swagger: "2.0"`` selects Swagger 2.0. An ``openapi`` string whose first
    two dot-separated components are ``3.0`` or ``3.1`` selects that
    dialect.

    Raises:
        UnsupportedVersionError: For any other ``swagger`` value, any other
            ``openapi`` value, or when neither marker is present.
    """
    if "swagger" in data:
        version = data["swagger"]
        if version == "2.0":
            return SpecVersion.SWAGGER_2_0
        raise UnsupportedVersionError(f"Unsupported Swagger version: {version}")

    if "openapi" in data:
        version = data["openapi"]
        if not isinstance(version, str):
            raise UnsupportedVersionError(f"Unsupported OpenAPI version: {version}")
        parts = version.split(".")
        if parts[:2] == ["3", "0"]:
            return SpecVersion.OPENAPI_3_0
        if parts[:2] == ["3", "1"]:
            return SpecVersion.OPENAPI_3_1
        raise UnsupportedVersionError(f"Unsupported OpenAPI version: {version}")

    raise UnsupportedVersionError("Missing version field (swagger or openapi)")


def construct_document(data: dict[str, Any]) -> RootDocument:
    """Detect the dialect and build the matching document family.

    Raises:
        UnsupportedVersionError: If the dialect cannot be determined.
        StructuralError: If the tree cannot be built.
    """
    version = detect_version(data)
    logger.debug("Detected %s", version.label)
    document = DOCUMENT_CLASSES[version].from_raw(data)
    return RootDocument(version=version, document=document)
