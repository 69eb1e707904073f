"""a2abridge — exposes remote A2A agents as MCP tools."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("a2a-bridge")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for development
