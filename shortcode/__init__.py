import importlib.metadata
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import dev, generator
from .generator.errors import CodeGeneratorError
from .models import ErrorPayload

PROJECT_NAME = "shortcode"

_LOGGER = logging.getLogger(__name__)

try:
    VERSION = importlib.metadata.version(PROJECT_NAME)
except importlib.metadata.PackageNotFoundError:
    VERSION = "unknown"  # type: ignore

app = FastAPI(
    title="Short Code Server",
    description="Issues short, collision-free codes from seeded LCG permutations.",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generator.router)
app.include_router(dev.router)


@app.exception_handler(CodeGeneratorError)
async def handle_generator_error(request: Request, exc: CodeGeneratorError):
    # errors the routes don't map to a payload themselves
    _LOGGER.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": ErrorPayload.generator_error(exc).model_dump()},
    )
