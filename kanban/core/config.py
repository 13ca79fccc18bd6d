from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./kanban.db")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "10080"))  # 7 jours
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # 30 jours
    CLIENT_URL = getenv("CLIENT_URL", "http://localhost:5173")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    DEFAULT_BOARD_COLOR = getenv("DEFAULT_BOARD_COLOR", "#6366f1")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CLIENT_URL.split(",") if origin.strip()]

settings = Settings()
