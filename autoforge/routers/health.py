"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime
from pathlib import Path

from autoforge.config import settings
from autoforge.dependencies import get_project_store, get_materializer
from autoforge.storage.filesystem import FileMaterializer
from autoforge.storage.interface import ProjectStore

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/storage")
def storage_health(
    store: ProjectStore = Depends(get_project_store),
    materializer: FileMaterializer = Depends(get_materializer)
) -> Dict[str, Any]:
    """
    Check project storage health.
    Verifies the projects and temp directories exist and counts records.
    """
    try:
        projects_dir = materializer.base_dir
        temp_dir = Path(settings.ARCHIVE_TEMP_DIR)
        on_disk = [path for path in projects_dir.iterdir() if path.is_dir()]
        
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "directories": {
                "projects": projects_dir.exists(),
                "temp": temp_dir.exists(),
            },
            "projects_in_store": len(store.list()),
            "projects_on_disk": len(on_disk),
        }
        
    except OSError as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }

@router.get("/health/detailed")
def detailed_health(
    store: ProjectStore = Depends(get_project_store),
    materializer: FileMaterializer = Depends(get_materializer)
) -> Dict[str, Any]:
    """
    Detailed health check of all system components.
    """
    storage_health_check = storage_health(store, materializer)
    
    return {
        "status": storage_health_check["status"],
        "timestamp": datetime.now().isoformat(),
        "storage": storage_health_check,
        "config": {
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG,
            "io_timeout_seconds": settings.IO_TIMEOUT_SECONDS,
            "ai_provider_configured": bool(settings.AI_PROVIDER_API_KEY),
        }
    }
