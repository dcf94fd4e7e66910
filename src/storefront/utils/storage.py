"""Classification of storage failures raised underneath the repositories."""

from contextlib import contextmanager

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.errors import StorefrontError, StoreUnavailable
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_errors(entity: str, **context):
    """Re-raise anything but a classified or not-found failure as StoreUnavailable.

    The original exception is logged and chained; its text never reaches the
    StoreUnavailable message.
    """
    try:
        yield
    except (ObjectNotFoundError, ValidationError, StorefrontError):
        raise
    except Exception as exc:
        logger.error("storage_failure", entity=entity, error=repr(exc), **context)
        raise StoreUnavailable(f"Unable to access {entity.lower()} data", entity=entity, **context) from exc
