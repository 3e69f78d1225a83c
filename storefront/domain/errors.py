# storefront/domain/errors.py
"""Error taxonomy shared by services and routers."""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code = 500


class ValidationError(StorefrontError):
    """Malformed or missing input, detected before any side effect."""

    status_code = 400


class NotFoundError(StorefrontError):
    """Referenced product or order does not exist."""

    status_code = 404


class ProductNotFoundError(NotFoundError):
    """A line item references a product that is gone. Reported as a bad order."""

    status_code = 400

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Product not found: {name}")


class OutOfStockError(StorefrontError):
    """Requested quantity exceeds available stock."""

    status_code = 400

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Out of stock: {name}")


class ForbiddenError(StorefrontError):
    """Caller is authenticated but lacks the role or ownership."""

    status_code = 403


class UnauthorizedError(StorefrontError):
    """Missing or invalid bearer credential."""

    status_code = 401


def format_validation_errors(errors) -> str:
    """Flatten pydantic error dicts into one readable message."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        where = ".".join(loc)
        parts.append(f"{where}: {err.get('msg')}" if where else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"
