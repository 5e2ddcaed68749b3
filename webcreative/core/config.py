import logging
from dotenv import load_dotenv
from pydantic import computed_field
from pydantic_settings import BaseSettings
from typing import List, Optional

# Load environment variables from .env file
load_dotenv(".env", override=True)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the WebCreative contact application."""

    # ------------------------------
    # Store selection
    # ------------------------------
    CONTACT_STORE: str = "sql"

    # ------------------------------
    # Relational store (Supabase / PostgreSQL, SQLite locally)
    # ------------------------------
    DATABASE_URL: str = "sqlite+aiosqlite:///./contacts.db"
    DATABASE_ECHO: bool = False

    # ------------------------------
    # Document store (MongoDB)
    # ------------------------------
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "webcreative"
    MONGODB_COLLECTION: str = "contacts"

    # ------------------------------
    # Mail relay (Microsoft Graph) - Optional
    # ------------------------------
    MICROSOFT_TENANT_ID: str = ""
    MICROSOFT_CLIENT_ID: str = ""
    MICROSOFT_CLIENT_SECRET: str = ""
    MAIL_SENDER: str = ""
    OWNER_EMAIL: str = ""

    # ------------------------------
    # Admin access - Optional
    # ------------------------------
    ADMIN_API_KEY_HASH: str = ""

    # ------------------------------
    # Rate limiting
    # ------------------------------
    RATE_LIMIT_ENABLED: bool = True
    CONTACT_RATE_LIMIT: str = "10/minute"

    # ------------------------------
    # Server
    # ------------------------------
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def MAIL_ENABLED(self) -> bool:
        """Notifications are only sent when every relay credential is present."""
        return all([
            self.MICROSOFT_TENANT_ID,
            self.MICROSOFT_CLIENT_ID,
            self.MICROSOFT_CLIENT_SECRET,
            self.MAIL_SENDER,
        ])

    @computed_field
    @property
    def OWNER_NOTIFICATION_EMAIL(self) -> Optional[str]:
        """Owner alerts go to OWNER_EMAIL, falling back to the relay mailbox."""
        return self.OWNER_EMAIL or self.MAIL_SENDER or None

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()
