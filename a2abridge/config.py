"""Global configuration — loaded from environment variables."""

from pydantic_settings import BaseSettings


class BridgeSettings(BaseSettings):
    request_timeout: float = 30.0  # seconds, per HTTP request to a peer
    log_level: str = "INFO"
    server_name: str = "a2a-bridge"

    # JSON array of {endpoint, accessToken?, descriptorSubPath?} to load on startup
    agents: str = ""

    model_config = {"env_prefix": "A2A_BRIDGE_"}


settings = BridgeSettings()
