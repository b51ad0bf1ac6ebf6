# kiosk-relay/app/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.face_router import router as face_router
from app.api.storage_router import router as storage_router
from app.core.body_limit import BodySizeLimitMiddleware
from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.aws_services import S3BlobStore
from app.services.face_services import build_face_detector

logger = get_logger("kiosk-relay")
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Both clients are stateless request/response wrappers; built once, never reconnected.
    app.state.face_detector = build_face_detector(settings)
    app.state.blob_store = S3BlobStore.from_settings(settings)
    logger.info(f"Relay ready: provider={settings.DETECTION_PROVIDER}, bucket={settings.S3_BUCKET_NAME}")
    yield


app = FastAPI(
    title="Kiosk relay",
    description="Relays kiosk requests to a face-detection provider and to the PDF object store.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(BodySizeLimitMiddleware, settings=settings)


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Face server up ✅"


app.include_router(face_router, tags=["Faces"])
app.include_router(storage_router, tags=["Storage"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
