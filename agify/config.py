from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    base_url: str = "https://api.agify.io"
    api_key: str | None = None
    timeout: float = 30.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "AGIFY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
