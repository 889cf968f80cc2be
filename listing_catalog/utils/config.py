from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000"
    MEDIA_BASE_URL: str = "http://localhost:5000/uploads/imoveis"
    API_TOKEN: Optional[str] = None
    SEARCH_DEBOUNCE_MS: int = Field(default=600, ge=0)
    HTTP_TIMEOUT: float = Field(default=30.0, gt=0)
    PHOTO_PLACEHOLDER: str = "/images/placeholder.png"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def debounce_seconds(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0
