from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración de la aplicación utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Clinic Scheduler API"
    PROJECT_DESCRIPTION: str = "Motor de agenda de turnos para clínicas odontológicas multi-tenant"
    VERSION: str = "1.0.0"

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="Host de PostgreSQL")
    DB_PORT: int = Field(5432, description="Puerto de PostgreSQL")
    DB_NAME: str = Field("clinic_scheduler", description="Nombre de la base de datos")
    DB_USER: str = Field("postgres", description="Usuario de PostgreSQL")
    DB_PASSWORD: str | None = Field(None, description="Contraseña de PostgreSQL")
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Tamaño del pool de conexiones")
    DB_MAX_OVERFLOW: int = Field(30, description="Máximo overflow del pool")
    DB_POOL_RECYCLE: int = Field(3600, description="Reciclar conexiones cada X segundos")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout para obtener conexión del pool")

    # Environment
    DEBUG: bool = Field(False, description="Modo debug")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    LOG_FORMAT: str = Field("colored", description="Formato de logs: colored, json o plain")
    SENTRY_DSN: str | None = Field(None, description="DSN de Sentry (opcional)")
    CORS_ORIGINS: str = Field("*", description="Orígenes permitidos para CORS, separados por coma")

    # Tenancy headers (resueltos por el gateway de autenticación)
    TENANT_HEADER: str = Field("X-Tenant-ID", description="Header con el ID del tenant del llamador")
    ROLE_HEADER: str = Field("X-User-Role", description="Header con el rol del llamador")
    USER_HEADER: str = Field("X-User-ID", description="Header con el ID del usuario llamador")

    # Plan gratuito (fallback cuando el tenant no tiene suscripción activa)
    FREE_PLAN_NAME: str = Field("free", description="Nombre del plan por defecto")
    FREE_PLAN_MAX_ADMINS: int = Field(1, description="Máximo de administradores del plan gratuito")
    FREE_PLAN_MAX_DOCTORS: int = Field(3, description="Máximo de doctores del plan gratuito")
    FREE_PLAN_MAX_PATIENTS: int = Field(15, description="Máximo de pacientes del plan gratuito")

    # Listados
    DEFAULT_PAGE_SIZE: int = Field(50, description="Tamaño de página por defecto para listados")
    MAX_PAGE_SIZE: int = Field(100, description="Tamaño de página máximo para listados")

    # Pagos
    AUTO_PAYMENT_NOTE: str = Field("Pago en consulta", description="Nota de pagos creados al agendar un turno")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v):
        if v < 0:
            raise ValueError("DB_MAX_OVERFLOW must be 0 or greater")
        if v > 200:
            raise ValueError("DB_MAX_OVERFLOW should not exceed 200")
        return v

    @field_validator("FREE_PLAN_MAX_ADMINS", "FREE_PLAN_MAX_DOCTORS", "FREE_PLAN_MAX_PATIENTS")
    @classmethod
    def validate_plan_limit(cls, v):
        if v < 0:
            raise ValueError("Plan limits must be 0 or greater")
        return v

    @field_validator("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("Page sizes must be at least 1")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """Construye la URL de conexión a PostgreSQL (sync, usada por Alembic)"""
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            return f"postgresql://{user}:{quote_plus(self.DB_PASSWORD)}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def async_database_url(self) -> str:
        """URL de conexión async (asyncpg)"""
        return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Lista de orígenes CORS"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Descarta la instancia cacheada (usado por los tests)."""
    global _settings_instance
    _settings_instance = None
