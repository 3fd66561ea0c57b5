import logging
from fastapi import FastAPI
from fusion_importer.api.v1 import router as api_router
from fusion_importer.config import get_settings


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Fusion Importer",
    description="Normalizes gene fusion caller reports into one fusion record format",
    version="1.0.0"
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
