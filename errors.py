"""Failures raised while turning a report into form data.

Every error carries the HTTP status the facade answers with; anything that is
not an ``AssistantError`` ends up as a 500.
"""


class AssistantError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AssistantError):
    """Missing or empty input."""


class ServiceUnavailableError(AssistantError):
    status_code = 503


class UpstreamError(AssistantError):
    """The model call itself failed (network, auth, quota...)."""


class UpstreamParseError(AssistantError):
    """The model answered, but not with usable JSON."""


class IncompleteResponseError(AssistantError):
    pass


class InsufficientContentError(AssistantError):
    """The reply parsed fine but says too little to fill a ticket."""
