from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite+pysqlite:///:memory:"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    seed_demo_data: bool = True
    log_level: str = "INFO"
    institution_name: str = "Politeknik Negeri Semarang"
    graduate_trend_years: str = "2020,2021,2022,2023,2024"
    insight_employment_good: int = 70
    insight_employment_fair: int = 50
    insight_entrepreneurship_high: int = 20

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        # Render/Postgres providers often expose postgres:// URLs.
        if isinstance(value, str) and value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://"):]
        return value

    def trend_years(self) -> list[int]:
        years = []
        for raw in self.graduate_trend_years.split(","):
            raw = raw.strip()
            if raw.isdigit():
                years.append(int(raw))
        return years

settings = Settings()
