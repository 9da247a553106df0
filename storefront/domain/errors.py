# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for errors scoped to a single user action, never fatal to the process."""


class CatalogFetchFailure(StorefrontError):
    """Product query failed (network or non-2xx). User retries explicitly."""


class OrderSubmissionFailure(StorefrontError):
    """Order creation failed. The cart is kept so the user can resubmit."""


class MalformedPriceData(StorefrontError, ValueError):
    """Price missing, non-numeric, not finite or negative."""
