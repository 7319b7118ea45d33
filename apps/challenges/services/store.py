"""Translate database failures into StoreUnavailableError."""

import logging
from contextlib import contextmanager

from django.db import DatabaseError

from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str):
    """Wrap a block so DatabaseError surfaces as ``"<action> failed: <reason>"``."""
    try:
        yield
    except DatabaseError as e:
        logger.error("%s failed: %s", action, e)
        raise StoreUnavailableError(f"{action} failed: {e}") from e
