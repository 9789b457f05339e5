"""The tagged root container returned by the parser."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from specparse.models.base import SpecVersion
from specparse.models.v2.document import SwaggerDocument
from specparse.models.v3.document import OpenAPI30Document, OpenAPI31Document

AnyDocument = Union[SwaggerDocument, OpenAPI30Document, OpenAPI31Document]


class RootDocument(BaseModel):
    """A parsed document tagged with the dialect it was detected as.

    ``version`` always agrees with the class of ``document``:
    :class:`SwaggerDocument` for 2.0, :class:`OpenAPI30Document` for 3.0 and
    :class:`OpenAPI31Document` for 3.1.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: SpecVersion
    document: AnyDocument

    def check(self) -> None:
        """Validate the wrapped document with root-relative breadcrumbs."""
        self.document.check("")

    @property
    def title(self) -> Any:
        return self.document.info.title if self.document.info else None

    @property
    def api_version(self) -> Any:
        return self.document.info.version if self.document.info else None

    def operations(self) -> Iterator[tuple[str, str, Any]]:
        """Yield ``(path, method, operation)`` across the document's paths."""
        return self.document.operations()

    @property
    def path_count(self) -> int:
        return len(self.document.paths or {})

    @property
    def schema_count(self) -> int:
        return self.document.schema_count
