from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: str = "localhost"
    PGDATABASE: str = "taxi_fare_db"
    PGUSER: str = "postgres"
    PGPASSWORD: str = ""
    PGSSLMODE: str = "prefer"
    DB_TIMEOUT_SECONDS: int = 10

    # Application
    PROJECT_NAME: str = "Taxi Fare Calculator"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    # Fares
    FARE_TIMEZONE: str = "Africa/Addis_Ababa"
    NIGHT_FARE_MULTIPLIER: float = 1.4
    NIGHT_FARE_START_HOUR: float = 18.5  # 18:30
    NIGHT_FARE_END_HOUR: float = 22.5  # 22:30

    # External services
    OSRM_BASE_URL: str = "http://router.project-osrm.org"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    CLOUDINARY_URL: Optional[str] = None
    CLOUDINARY_FOLDER: str = "redat-contributions"
    RESEND_API_KEY: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None
    CONTRIBUTION_SENDER: str = "Redat Contributions <onboarding@resend.dev>"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"

    @property
    def allowed_origins(self) -> list:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
