from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    llm_model: str = "gemini/gemini-2.0-flash"
    llm_api_key: str = ""
    login_max_attempts: int = 5  # Failed logins allowed per username within the window
    login_window_seconds: int = 120
    workspace_idle_seconds: int = 3600  # Idle note stores are dropped and reloaded on next use

    model_config = {
        "env_file": [".env"],
        "env_prefix": "POCKETNOTE_",
        "extra": "ignore",
    }
