import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes.subtitles import router as subtitles_router
from src.config import settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="CapLearn API",
    description="Video transcription with word-level subtitle timings",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(subtitles_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Keep the {"error": ...} shape the browser client expects.
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "CapLearn API is running"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.api_host, port=settings.port)
