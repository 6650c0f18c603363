from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Credstore"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Account registry
    REGISTRY_PATH: str = "app_data/shared/accounts.db"
    DB_TIMEOUT: float = 5.0  # seconds to wait on a locked registry

    # Credential derivation
    BCRYPT_ROUNDS: int = 12

    # Statistics
    RECENT_LOGIN_DAYS: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
