"""
api_server.py - FastAPI Backend for the Duty Roster Parser
==========================================================

RESTful API exposing the roster extraction pipeline.

Endpoints:
- POST /api/parse - Upload roster (PDF or plain text), get duties + diagnostics
- POST /api/parse/text - Parse already-extracted roster text
- GET /health - Health check

Usage:
    uvicorn api.api_server:app --reload --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, UploadFile, File, HTTPException, Form
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path
import io
import logging

from core.parameters import ParserConfig
from models.data_models import ParseResult
from parsers.roster_parser import DutyRosterParser
from parsers.pdf_text import extract_pdf_text

logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP INITIALIZATION
# ============================================================================

app = FastAPI(
    title="Duty Roster Parser API",
    description="Extracts duty records and parsing diagnostics from crew duty-plan rosters",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

CONFIG_PRESETS = {
    "default": ParserConfig.default_config,
    "strict": ParserConfig.strict_config,
    "lenient": ParserConfig.lenient_config,
}

# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class TextParseRequest(BaseModel):
    text: str
    config_preset: str = "default"


class PeriodResponse(BaseModel):
    start_date: str  # YYYY-MM-DD
    end_date: str    # YYYY-MM-DD


class DutyResponse(BaseModel):
    id: str
    date: str              # YYYY-MM-DD anchor date
    type: str              # OFF, STANDBY, FLIGHT, DEADHEAD
    duty_code: Optional[str] = None
    flight_number: str
    departure_station: Optional[str] = None
    arrival_station: Optional[str] = None
    departure_time: str    # UTC ISO format
    arrival_time: str      # UTC ISO format
    annotation: Optional[str] = None
    source_key: str        # operator/dd-mm-yyyy/fragment, not unique


class LogEntryResponse(BaseModel):
    type: str              # UNPARSEABLE, EDGE_CASE, IGNORED, WARNING
    message: str
    line: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    timestamp: str


class ParseResponse(BaseModel):
    operator_id: str
    period: PeriodResponse
    summary: Dict[str, int]
    unknown_stations: List[str] = []
    duties: List[DutyResponse]
    logs: List[LogEntryResponse]


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _resolve_config(preset: str) -> ParserConfig:
    if preset not in CONFIG_PRESETS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid config_preset '{preset}'. Must be one of: {', '.join(CONFIG_PRESETS)}"
        )
    return CONFIG_PRESETS[preset]()


def _build_response(result: ParseResult) -> ParseResponse:
    """Shared serialization for both parse endpoints; fatal failures become 422"""
    logs = [LogEntryResponse(**entry) for entry in result.logs_as_dicts()]

    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail={
                "error": type(result.error).__name__,
                "message": str(result.error),
                "logs": [entry.model_dump() for entry in logs],
            }
        )

    duties = []
    for duty in result.duties:
        record = duty.to_dict()
        duties.append(DutyResponse(
            id=record['id'],
            date=record['date'],
            type=record['type'],
            duty_code=record['dutyCode'],
            flight_number=record['flightNumber'],
            departure_station=record['departureStation'],
            arrival_station=record['arrivalStation'],
            departure_time=record['departureTime'],
            arrival_time=record['arrivalTime'],
            annotation=record['annotation'],
            source_key=record['sourceKey'],
        ))

    return ParseResponse(
        operator_id=result.operator_id,
        period=PeriodResponse(
            start_date=result.period.start_date.isoformat(),
            end_date=result.period.end_date.isoformat(),
        ),
        summary=result.summary(),
        unknown_stations=result.unknown_stations,
        duties=duties,
        logs=logs,
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Service info"""
    return {
        "status": "ok",
        "service": "Duty Roster Parser API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/api/parse", response_model=ParseResponse)
async def parse_roster(
    file: UploadFile = File(...),
    config_preset: str = Form("default"),
):
    """
    Upload roster file and get the extracted duties

    Accepts PDF (text layer is extracted) or plain-text exports.
    """
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="No file provided")

        suffix = Path(file.filename).suffix.lower()
        if suffix not in ['.pdf', '.txt']:
            raise HTTPException(status_code=400, detail="Unsupported file format. Use PDF or TXT.")

        config = _resolve_config(config_preset)
        content = await file.read()

        if suffix == '.pdf':
            text = extract_pdf_text(io.BytesIO(content))
        else:
            text = content.decode('utf-8', errors='replace')

        result = DutyRosterParser(config).parse_text(text)
        return _build_response(result)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Roster upload failed")
        raise HTTPException(status_code=500, detail=f"Parsing failed: {str(e)}")


@app.post("/api/parse/text", response_model=ParseResponse)
async def parse_roster_text(request: TextParseRequest):
    """Parse roster text that was extracted elsewhere"""
    try:
        config = _resolve_config(request.config_preset)
        result = DutyRosterParser(config).parse_text(request.text)
        return _build_response(result)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Roster text parse failed")
        raise HTTPException(status_code=500, detail=f"Parsing failed: {str(e)}")
