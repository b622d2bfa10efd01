"""
Private Notes Client — Configuration
=====================================

What:  Client settings loaded with Pydantic Settings from NOTES_* environment
       variables (or .env).
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):

    # Base URL of the Private Notes backend
    api_url: str = Field(default="http://localhost:3001")

    request_timeout: float = Field(default=10.0, gt=0, le=120)

    # Quiet period after the last edit before the editor autosaves
    autosave_delay: float = Field(default=2.0, gt=0, le=60)

    model_config = {
        "env_prefix": "NOTES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


client_settings = ClientSettings()
