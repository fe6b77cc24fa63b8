from dataclasses import dataclass
import os

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_name: str
    database_url: str
    log_level: str
    api_prefix: str
    cors_origins: tuple[str, ...]
    upload_roles: tuple[str, ...]
    notify_roles: tuple[str, ...]
    host: str
    port: int


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "landrecords"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./landrecords.db"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_prefix=os.getenv("API_PREFIX", "/api/v1"),
        cors_origins=_csv(os.getenv("CORS_ORIGIN", "http://localhost:5173")),
        upload_roles=_csv(os.getenv("UPLOAD_ROLES", "ADMINISTRATOR")),
        notify_roles=_csv(os.getenv("NOTIFY_ROLES", "ADMINISTRATOR,APPROVER")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
