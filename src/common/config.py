from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    # Episodes (Star Wars Fandom wiki)
    episodes_index_url: str = "https://starwars.fandom.com/wiki/Andor_Season_2#episodes"

    # Browser session
    browser_session_ttl_seconds: float = 300.0
    browser_headless: bool = True
    browser_cdp_endpoint: str = ""  # Remote browser, empty = launch local chromium

    # Navigation
    navigation_timeout_ms: int = 30_000
    episode_page_max_attempts: int = 3
    episode_page_retry_delay: float = 1.0

    # OpenAI (Azure when an endpoint is set)
    openai_key: SecretStr = SecretStr("")
    openai_endpoint: str = ""
    openai_api_version: str = "2025-01-01-preview"
    openai_model: str = "gpt-4.1-mini"

    # LLM settings
    temperature: float = 0.0

    # MCP
    mcp_host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"
    log_format: str = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


config = Config()
