from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str
    
    # Ambiente
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Liga o echo de SQL do SQLAlchemy
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    # Unidades de embalagem
    PACKAGE_UNIT_NAME_MAX_LENGTH: int = 50  # mesmo limite da coluna unit_name
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
