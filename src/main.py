"""
Pipeline AI -- FastAPI application entry point.
CI/CD pipeline configuration generator service.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import config
from src.routes import pipelines
from src.utils.logger import logger
from src.services.pipeline_service import create_pipeline_ai


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("Pipeline AI starting up...")

    if not config.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set -- every request will use template generation")

    app.state.pipeline_ai = create_pipeline_ai()

    logger.info("Pipeline AI ready.")
    yield

    # Shutdown
    logger.info("Pipeline AI shutting down...")
    try:
        await app.state.pipeline_ai.close()
    except Exception as e:
        logger.warning(f"Completion client cleanup error: {e}")
    logger.info("Pipeline AI stopped.")


app = FastAPI(
    title="Pipeline AI",
    description="Generate CI/CD pipeline configuration from natural language descriptions.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in config.CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(pipelines.router, prefix="/api/pipelines", tags=["pipelines"])


@app.get("/health")
async def health():
    """Health check. Reports whether AI generation is configured."""
    return {
        "status": "ok",
        "service": "pipeline-ai",
        "version": "0.1.0",
        "mode": "ai" if config.OPENAI_API_KEY else "template",
    }


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "data": None,
            "message": "Internal server error",
            "error": "INTERNAL_ERROR",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=config.DEBUG,
    )
