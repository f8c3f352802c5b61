from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "FinPlan API"
    API_V1_STR: str = "/api"

    @field_validator("CORS_ORIGIN_URLS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    CORS_ORIGIN_URLS: list[str] | str = []

    # Extra
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Projections
    DEFAULT_PROJECTION_YEARS: int = 60 # endYear = reference year + 60 when unspecified
    MAX_PROJECTION_YEARS: int = 100
    MAX_COMPARE_PROJECTIONS: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
