"""Extension point for ``$ref`` resolution.

References are kept as :class:`~specparse.models.base.Reference` nodes in the
built tree. Resolution is expected to run as a post-pass over an already
constructed document; it currently returns the document unchanged.
"""

from __future__ import annotations

import logging

from specparse.models.document import RootDocument

logger = logging.getLogger(__name__)


def resolve_references(document: RootDocument) -> RootDocument:
    """Return *document* with references resolved (currently the identity)."""
    logger.debug("Reference resolution requested; references are left in place")
    return document
