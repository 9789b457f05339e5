"""Typed document model for Swagger 2.0, OpenAPI 3.0 and OpenAPI 3.1.

Every object kind is a :class:`~specparse.models.base.Node` with a
``from_raw`` constructor and a ``check`` validator. Dialect-specific
families live in :mod:`specparse.models.v2` and :mod:`specparse.models.v3`;
objects whose shape is shared by all dialects live in
:mod:`specparse.models.common`.
"""

from specparse.models.base import Node, Reference, SpecVersion
from specparse.models.document import RootDocument

__all__ = ["Node", "Reference", "RootDocument", "SpecVersion"]
