from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB 문서 저장소
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "mydb"
    mongodb_collection: str = "documents"

    # Ollama 추론 서버
    ollama_base_url: str = "http://localhost:11434"
    model_name: str = "deepseek-r1:8b"

    # HTTP 서버
    host: str = "0.0.0.0"
    port: int = 8080

    # 요청별 처리 시간 제한 (초)
    upload_timeout_sec: float = 5.0
    summarize_timeout_sec: float = 10.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCGATE_",
        env_file=".env",
        extra="ignore",
        protected_namespaces=(),
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
