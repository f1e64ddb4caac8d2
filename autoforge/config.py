from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of autoforge directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""
    
    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    
    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    # Storage settings
    PROJECTS_DIR: str = str(REPO_ROOT / "storage" / "projects")
    ARCHIVE_TEMP_DIR: str = str(REPO_ROOT / "storage" / "temp")
    
    # Upper bound for lock waits, disk writes and archive builds
    IO_TIMEOUT_SECONDS: float = 30.0
    
    # External AI provider (not used by the template pipeline)
    AI_PROVIDER_ENDPOINT: str = "https://openrouter.ai/api/v1/chat/completions"
    AI_PROVIDER_MODEL: str = ""
    AI_PROVIDER_API_KEY: str = ""
    
    class Config:
        env_file = ".env"

settings = Settings() 
