import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from autoforge.schemas.api_schemas import CommandRequest, CommandResponse, ProjectDetail
from autoforge.dependencies import get_command_service
from autoforge.application.command_service import CommandService
from autoforge.domain.errors import DomainError, OperationTimeoutError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

@router.post("/execute", response_model=CommandResponse)
def execute_command(
    request: CommandRequest,
    service: CommandService = Depends(get_command_service)
):
    """
    Classify a natural-language command and generate the matching project.
    """
    try:
        result = service.execute(request.command)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})
    except OperationTimeoutError as exc:
        return JSONResponse(
            status_code=503,
            headers={"Retry-After": "1"},
            content={"success": False, "error": str(exc), "retryable": True},
        )
    except DomainError as exc:
        logger.error("Command failed: %s", exc)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})
    
    return CommandResponse(
        success=result.success,
        message=result.message,
        project=ProjectDetail.from_project(result.project),
    )
