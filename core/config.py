# core/config.py
"""
Configuration management for backend services
"""

from pydantic_settings import BaseSettings
from typing import List, Optional, Dict, Any
from functools import lru_cache
from enum import Enum
from dotenv import load_dotenv
load_dotenv()

class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class Settings(BaseSettings):
    """Application settings with validation"""

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # API Configuration
    api_title: str = "Agrilo Irrigation Advisor"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:4173"
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Cache Configuration (upstream provider responses only)
    cache_enabled: bool = True
    cache_default_ttl: int = 1800  # 30 minutes
    cache_max_size: int = 1000

    # Agent Configurations
    irrigation_config: Dict[str, Any] = {
        "forecast_url": "https://api.open-meteo.com/v1/forecast",
        "air_quality_url": "https://air-quality-api.open-meteo.com/v1/air-quality",
        "request_timeout_s": 10,
        "forecast_days": 7,
        "user_agent": "Agrilo/1.0 (contact@agrilo.com)"
    }

    class Config:
        env_file = ".env"
        case_sensitive = False

    def get_agent_config(self, agent_name: str) -> Dict[str, Any]:
        """Get configuration for specific agent"""
        config_map = {
            "irrigation": self.irrigation_config
        }
        return config_map.get(agent_name, {})

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
