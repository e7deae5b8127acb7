"""
VeriShield – Media Credibility Scoring
FastAPI application exposing the heuristic analysis engine.
"""

import os
import uuid
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Response, UploadFile
from fastapi.staticfiles import StaticFiles
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware

from verishield import config
from verishield.engine import AnalysisEngine, get_default_engine
from verishield.exceptions import InvalidInputError, InvariantViolationError, ProviderError
from verishield.history import AnalysisHistory
from verishield.models import AnalysisResult, FileInfo

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("verishield")

# FastAPI app
app = FastAPI(
    title="VeriShield API",
    description="Heuristic media credibility scoring",
    version=config.VERSION
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve static files
static_dir = os.path.join(os.path.dirname(__file__), "static")
if os.path.isdir(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

_history = AnalysisHistory()


def get_engine() -> AnalysisEngine:
    return get_default_engine()


def get_history() -> AnalysisHistory:
    return _history


@app.get("/", response_class=HTMLResponse)
async def serve_index():
    """Serve the main frontend page."""
    index_path = os.path.join(static_dir, "index.html")
    if os.path.exists(index_path):
        with open(index_path, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())
    return HTMLResponse(content="<h1>VeriShield</h1><p>Frontend not found. Place index.html in static/</p>")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": config.SERVICE_NAME,
        "version": config.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.post("/api/analyze", response_model=AnalysisResult)
async def analyze_media(
    file: UploadFile = File(...),
    media_id: Optional[str] = Form(None),
    last_modified: Optional[int] = Form(None),
    engine: AnalysisEngine = Depends(get_engine),
    history: AnalysisHistory = Depends(get_history)
):
    """
    Upload an image, video or audio file and score its credibility.
    `last_modified` is the file's modification time in epoch milliseconds.
    """
    media_id = media_id or f"media_{uuid.uuid4().hex[:8]}"
    logger.info(f"[{media_id}] Received upload: {file.filename}")

    # Validate file
    content_type = (file.content_type or "").lower()
    if not content_type.startswith(config.SUPPORTED_MEDIA_PREFIXES):
        raise HTTPException(status_code=400, detail="File must be an image, video or audio file")

    try:
        data = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if not data:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(data) > config.MAX_UPLOAD_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File too large (max {config.MAX_UPLOAD_MB}MB)")

    if last_modified is not None:
        try:
            modified_at = datetime.fromtimestamp(last_modified / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise HTTPException(status_code=400, detail=f"Invalid last_modified: {last_modified}")
    else:
        modified_at = datetime.now(timezone.utc)

    try:
        file_info = FileInfo(
            name=file.filename or "upload",
            content_type=content_type,
            size=len(data),
            last_modified=modified_at
        )
        result = await engine.analyze(file_info, media_id)
    except InvalidInputError as e:
        logger.error(f"[{media_id}] Invalid input: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except ProviderError as e:
        logger.error(f"[{media_id}] {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except InvariantViolationError as e:
        logger.exception(f"[{media_id}] Analysis produced an inconsistent result")
        raise HTTPException(status_code=500, detail=str(e))

    history.record(result)
    return result


@app.get("/api/history", response_model=list[AnalysisResult])
async def list_history(history: AnalysisHistory = Depends(get_history)):
    """Recent analyses, newest first."""
    return history.list()


@app.get("/api/history/{analysis_id}", response_model=AnalysisResult)
async def get_history_item(analysis_id: str, history: AnalysisHistory = Depends(get_history)):
    result = history.get(analysis_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No analysis with id {analysis_id}")
    return result


@app.delete("/api/history", status_code=204)
async def clear_history(history: AnalysisHistory = Depends(get_history)):
    history.clear()
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=False)
