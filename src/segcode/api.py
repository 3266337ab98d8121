"""FastAPI REST API — Driving adapter for remote table generation.

Endpoints:
    GET  /health        — Server status
    GET  /patterns      — Built-in character patterns
    POST /generate      — Generate lookup-table source text
    POST /preview.png   — PNG preview of the preview characters

Run with any ASGI server, e.g. ``uvicorn segcode.api:app``.
"""
from __future__ import annotations

import io
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from segcode.__version__ import __version__
from segcode.core.models import (
    BitOrder,
    EncodingConfig,
    NumberFormat,
    OrderPreset,
    OutputStyle,
    Polarity,
    ScanMode,
)
from segcode.patterns import BASE_PATTERNS, PatternTable, sorted_segments
from segcode.services import GeneratorSession

log = logging.getLogger(__name__)

MAX_CHARSET = 512

app = FastAPI(title="segcode", version=__version__)


# ── Pydantic models ──────────────────────────────────────────────────

class GenerateRequest(BaseModel):
    order: Optional[str] = None
    preset: OrderPreset = OrderPreset.FORWARD
    bit_order: BitOrder = BitOrder.MSB
    polarity: Polarity = Polarity.COMMON_CATHODE
    number_format: NumberFormat = NumberFormat.BIN
    output_style: OutputStyle = OutputStyle.ARRAY
    scan_mode: ScanMode = ScanMode.STATIC
    digit_count: int = 4
    charset: str = "0123456789"
    sample_text: str = "0123"
    overrides: Dict[str, List[str]] = Field(default_factory=dict)


class EntryResponse(BaseModel):
    char: str
    raw: int
    value: int
    text: str


class GenerateResponse(BaseModel):
    code: str
    warnings: List[str]
    preview: List[str]
    entries: List[EntryResponse]


# ── Helpers ───────────────────────────────────────────────────────────

def _session_from_request(req: GenerateRequest) -> GeneratorSession:
    """Build a session, mapping bad overrides/charset to HTTP 400."""
    if len(req.charset) > MAX_CHARSET:
        raise HTTPException(status_code=400,
                            detail=f"charset longer than {MAX_CHARSET} characters")
    try:
        patterns = PatternTable(req.overrides)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    config = EncodingConfig(
        bit_order=req.bit_order,
        polarity=req.polarity,
        number_format=req.number_format,
        output_style=req.output_style,
        scan_mode=req.scan_mode,
        digit_count=req.digit_count,
        charset=tuple(req.charset),
    )
    session = GeneratorSession(config, patterns, req.sample_text)
    if req.order is not None:
        session.preset = OrderPreset.CUSTOM
        session.set_custom_order(req.order)
    else:
        session.select_preset(req.preset)
    return session


# ── Endpoints ────────────────────────────────────────────────────────

@app.get("/health")
def health() -> dict:
    return {"status": "ok", "version": __version__}


@app.get("/patterns")
def list_patterns() -> Dict[str, List[str]]:
    """Built-in table, segments in a..dp order."""
    return {ch: sorted_segments(segs) for ch, segs in BASE_PATTERNS.items()}


@app.post("/generate")
def generate_table(req: GenerateRequest) -> GenerateResponse:
    session = _session_from_request(req)
    result = session.generate()
    return GenerateResponse(
        code=result.code,
        warnings=result.warnings,
        preview=result.preview,
        entries=[
            EntryResponse(char=e.char, raw=e.raw_value, value=e.value, text=e.text)
            for e in result.entries
        ],
    )


@app.post("/preview.png")
def preview_png(req: GenerateRequest, size: int = 80) -> Response:
    from segcode.preview import render_image

    if not 8 <= size <= 400:
        raise HTTPException(status_code=400, detail="size must be 8-400")
    session = _session_from_request(req)
    result = session.generate()
    cells = [session.patterns.effective_pattern(ch) for ch in result.preview]
    buf = io.BytesIO()
    render_image(cells, size=size).save(buf, format="PNG")
    return Response(content=buf.getvalue(), media_type="image/png")
