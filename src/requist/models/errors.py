class RequistError(Exception):
    """Base class for errors raised by requist itself.

    Transport failures are not wrapped: they surface as the ``httpx``
    exceptions raised by the underlying client.
    """


class BaseUrlInvalidError(RequistError):
    def __init__(self, base_url: str, message: str | None = None):
        self.base_url = base_url
        self.message = message or (
            f"Invalid base URL {base_url!r}: expected an http(s) URL with a valid host."
        )
        super().__init__(self.message)


class BodyEncodeError(RequistError):
    """Raised when a request payload cannot be encoded.

    Nothing has been sent when this is raised.
    """

    def __init__(self, content_type: str, reason: str):
        self.content_type = content_type
        self.reason = reason
        self.message = f"Cannot encode request body as {content_type}: {reason}"
        super().__init__(self.message)


class BodyDecodeError(RequistError):
    """Raised when a response body cannot be decoded into its destination.

    The request itself completed, so the status code has already been recorded
    on the client.
    """

    def __init__(self, content_type: str, reason: str):
        self.content_type = content_type
        self.reason = reason
        self.message = f"Cannot decode response body as {content_type}: {reason}"
        super().__init__(self.message)
