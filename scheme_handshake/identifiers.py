import uuid

# Literal token used for smoke-testing the handshake without a random id
FIXED_TOKEN = "foobar"


def new_session_identifier() -> str:
    """Generate a random session identifier as a lowercase UUID string."""
    return str(uuid.uuid4()).lower()
