# ABOUTME: Exception hierarchy for failed forecast requests.
# ABOUTME: Separates connection/timeout failures, backend error responses, and malformed payloads.


class ForecastError(Exception):
    """A forecast request failed; ``message`` is suitable for display."""

    default_message = "Failed to fetch weather data"

    def __init__(self, message: str | None = None):
        # detail is None when the failure carried no specific message
        self.detail = message
        self.message = message or self.default_message
        super().__init__(self.message)


class ForecastConnectionError(ForecastError):
    """The backend could not be reached or did not answer in time."""

    default_message = "Could not connect to the weather server"

    def __init__(self, message: str | None = None, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class ForecastAPIError(ForecastError):
    """The backend answered with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message)
        self.status_code = status_code


class ForecastResponseError(ForecastError):
    """The backend answered successfully but the body is not a valid forecast."""

    default_message = "Received an invalid forecast from the weather server"
