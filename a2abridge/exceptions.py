"""Custom exception hierarchy for a2abridge."""


class BridgeError(Exception):
    """Base for all bridge errors."""


class AlreadyRegistered(BridgeError):
    """A peer with the same sanitized name is already loaded."""


class NotRegistered(BridgeError):
    """No peer with the given name has been loaded."""


class TaskNotFound(BridgeError):
    """Task id was not issued by this process to the addressed peer."""


class DescriptorFetchFailed(BridgeError):
    """The agent card could not be fetched or parsed."""


class RemoteProtocolError(BridgeError):
    """The peer answered with something that is not a valid A2A response."""


class BridgeConfigError(BridgeError):
    """Startup configuration is malformed."""


class ToolNotFoundError(BridgeError):
    """Requested tool does not exist in the registry."""


class ToolConflictError(BridgeError):
    """A tool with the same name is already installed."""


def one_line(error: BaseException) -> str:
    """Collapse an exception message to a single line for tool output."""
    text = " ".join(str(error).split())
    return text or type(error).__name__
