from fastapi import APIRouter
from fusion_importer.api.v1 import fusions

router = APIRouter()
router.include_router(fusions.router, prefix="/fusions", tags=["fusions"])
