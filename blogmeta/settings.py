from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    CONTENT_DIR: str = "content"
    POSTS_SECTION: str = "posts"
    INCLUDE_DRAFTS: bool = False
    INCLUDE_FUTURE: bool = False

    # Site
    BASE_URL: str = "http://localhost:1313"
    WORDS_PER_MINUTE: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    BLOG_API_KEY: str = ""

    @property
    def posts_dir(self) -> Path:
        return Path(self.CONTENT_DIR) / self.POSTS_SECTION

    @property
    def posts_url(self) -> str:
        return f"{self.BASE_URL.rstrip('/')}/{self.POSTS_SECTION.strip('/')}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
