"""Domain errors raised at the data-gateway boundary."""

from typing import Optional


class PricingError(Exception):
    """Base error with a stable code and a user-safe message."""

    code = "PRICING_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class HallNotFoundError(PricingError):
    """Raised when a hall does not exist."""

    code = "HALL_NOT_FOUND"

    def __init__(self, hall_id: str) -> None:
        super().__init__("Hall not found")
        self.hall_id = hall_id


class PricingDataFetchError(PricingError):
    """Raised when pricing rows could not be read from the backend."""

    code = "FETCH_FAILED"

    def __init__(self, resource: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Failed to fetch {resource}")
        self.resource = resource
        self.cause = cause


class InvalidDateRangeError(PricingError):
    """Raised when a requested calendar range is inverted or too long."""

    code = "INVALID_DATE_RANGE"


class UnknownServiceError(PricingError):
    """Raised when a quote references services the hall does not offer."""

    code = "UNKNOWN_SERVICE"

    def __init__(self, service_ids: list[str]) -> None:
        super().__init__("Unknown service for this hall")
        self.service_ids = service_ids
