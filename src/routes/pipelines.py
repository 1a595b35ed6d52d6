from fastapi import APIRouter, Depends, Request

from src.models.common import APIResponse
from src.models.pipeline import (
    DEFAULT_LANGUAGE,
    DEFAULT_PLATFORM,
    DeploymentTarget,
    Language,
    Platform,
    PipelineRequest,
)
from src.services.pipeline_service import PipelineAI, get_file_path

router = APIRouter()


def get_pipeline_ai(request: Request) -> PipelineAI:
    """Shared generator built in the app lifespan."""
    return request.app.state.pipeline_ai


@router.post("/", response_model=APIResponse)
async def generate(
    req: PipelineRequest,
    pipeline_ai: PipelineAI = Depends(get_pipeline_ai),
):
    """Generate CI/CD pipeline configuration from a natural language description."""
    result = await pipeline_ai.generate(req)
    return APIResponse(success=result.success, data=result.model_dump(mode="json"))


@router.get("/options", response_model=APIResponse)
async def list_options():
    """Supported languages, platforms, deployment targets and suggested file paths."""
    return APIResponse(
        success=True,
        data={
            "languages": [lang.value for lang in Language],
            "platforms": [p.value for p in Platform],
            "deployment_targets": [t.value for t in DeploymentTarget],
            "file_paths": {p.value: get_file_path(p) for p in Platform},
            "defaults": {
                "language": DEFAULT_LANGUAGE.value,
                "platform": DEFAULT_PLATFORM.value,
            },
        },
    )
