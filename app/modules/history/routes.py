from fastapi import APIRouter, Depends, HTTPException, Request
from app.config import settings
from app.core.dependencies import get_history_service
from app.core.exceptions import InvalidHistoryError
from app.core.rate_limit import limiter
from app.modules.history.service import HistoryService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["history"])


@router.post("/upload-history")
@limiter.limit(settings.upload_rate_limit)
async def upload_history(
    request: Request,
    service: HistoryService = Depends(get_history_service)
):
    """Store a finished game's score history JSON"""
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > service.max_bytes:
        raise HTTPException(status_code=400, detail="Invalid History Data.")

    chunks = []
    total = 0
    async for chunk in request.stream():
        total += len(chunk)
        if total > service.max_bytes:
            raise HTTPException(status_code=400, detail="Invalid History Data.")
        chunks.append(chunk)
    body = b"".join(chunks)
    try:
        filename = service.upload_history(body)
    except InvalidHistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error uploading score history: {str(e)}")
        raise HTTPException(status_code=500, detail="Error uploading score history")
    return {"filename": filename}


@router.get("/test-blob-connection")
@limiter.limit(settings.upload_rate_limit)
async def test_blob_connection(
    request: Request,
    service: HistoryService = Depends(get_history_service)
):
    """Write a marker blob to confirm storage is reachable"""
    try:
        service.test_connection()
    except Exception as e:
        logger.error(f"Error testing blob storage connection: {str(e)}")
        raise HTTPException(status_code=500, detail="Error testing blob storage connection")
    return {"message": "Connection to blob storage successful!"}
