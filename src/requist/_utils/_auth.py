import base64


def encode_basic_auth(credentials: str) -> str:
    """Return the ``Authorization`` value for ``username:password`` credentials."""
    token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
    return f"Basic {token}"
