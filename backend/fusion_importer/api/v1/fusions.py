import io
import logging
from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from typing import List, Optional
from fusion_importer.config import Settings, get_settings
from fusion_importer.core.errors import FusionImportError
from fusion_importer.core.importer import import_fusions
from fusion_importer.schemas.fusion import Fusion

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/import", response_model=List[Fusion])
async def import_fusion_file(
    response: Response,
    file: UploadFile = File(...),
    genome_version: str = Query(..., description="Genome used in mapping: hg19, hg38 or mm10"),
    tool: Optional[str] = Query(None, description="starfusion, arriba or defuse; detected when omitted"),
    limit: Optional[int] = Query(None, ge=1, description="Read at most this many fusions"),
    settings: Settings = Depends(get_settings)
):
    """Upload a STAR-Fusion, Arriba or deFuse report and return the normalized fusions."""
    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(413, f"File exceeds {settings.max_upload_bytes} bytes.")

    try:
        content_str = content.decode(settings.file_encoding)
    except UnicodeDecodeError:
        raise HTTPException(400, f"File is not valid {settings.file_encoding} text.")

    stream = io.StringIO(content_str)
    stream.name = file.filename or "<upload>"

    read_warnings: List[str] = []
    try:
        fusions = import_fusions(stream, genome_version, tool=tool, limit=limit, read_warnings=read_warnings)
    except FusionImportError as e:
        logger.warning(f"Import of {stream.name} failed: {e}")
        raise HTTPException(400, str(e))

    # Count of skipped or padded lines; details are in the server log
    response.headers["X-Import-Warnings"] = str(len(read_warnings))
    return fusions
