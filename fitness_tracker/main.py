from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitness_tracker.api.ai import router as ai_router
from fitness_tracker.api.workouts import router as workouts_router
from fitness_tracker.core.config import load_settings
from fitness_tracker.core.errors import APIError, describe_validation_errors

app = FastAPI(title="Fitness AI Tracker")
app.state.settings = load_settings()
INDEX_PAGE = Path(__file__).resolve().parent / "static" / "index.html"


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": describe_validation_errors(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": error}, headers=exc.headers)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/")
def root() -> FileResponse:
    return FileResponse(INDEX_PAGE)


@app.get("/api")
def api_root() -> dict[str, str]:
    return {"service": "Fitness AI Tracker API", "status": "ok"}


app.include_router(ai_router)
app.include_router(workouts_router)
