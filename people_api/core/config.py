import os

class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "People API")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/people")
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").lower() == "true"

    # startup retries while the database container comes up
    DB_CONNECT_RETRIES: int = int(os.getenv("DB_CONNECT_RETRIES", "5"))
    DB_CONNECT_RETRY_DELAY: float = float(os.getenv("DB_CONNECT_RETRY_DELAY", "1.0"))

    # logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "")  # empty disables the file handler

settings = Settings()
