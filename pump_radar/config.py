from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Finnhub social sentiment (Reddit + Twitter aggregate). Blank = source disabled.
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"

    # Alpha Vantage NEWS_SENTIMENT. Blank = source disabled.
    alpha_vantage_api_key: str = ""
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"

    # Reddit public JSON search (no auth)
    reddit_base_url: str = "https://www.reddit.com"
    reddit_user_agent: str = "linux:pump-radar:v0.1 (stock sentiment scanner)"

    # Yahoo Finance chart API
    yahoo_base_url: str = "https://query1.finance.yahoo.com"

    http_timeout_seconds: float = 15.0

    # Analysis windows
    social_feed_window_days: int = 7
    news_limit: int = 50
    mention_limit: int = 50

    # Web
    web_host: str = "0.0.0.0"
    web_port: int = 8000

    log_level: str = "INFO"


settings = Settings()
