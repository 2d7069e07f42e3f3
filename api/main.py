"""FastAPI application for GHG emissions reports.

Endpoints:
    GET    /api/health               - Health check
    GET    /api/emission-factors     - Reference emission factor table
    POST   /api/reports              - Assemble a report (optionally save it), return JSON
    POST   /api/reports/pdf          - Assemble + render, return a downloadable PDF
    POST   /api/reports/email        - Assemble + render, email the PDF to a recipient
    GET    /api/reports/{report_id}  - Fetch a saved report snapshot
    DELETE /api/reports/{report_id}  - Delete a saved report snapshot

Run with:
    uvicorn api.main:app --reload
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from datetime import date
from typing import Any, AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from carbonprospect.config import get_settings
from carbonprospect.emissions.factors import EMISSION_FACTORS
from carbonprospect.mail.client import MailerAuthError, SendGridMailer
from carbonprospect.storage import ReportStore
from report import (
    InvalidRecipientError,
    ReportingContext,
    ReportRecord,
    ReportRenderError,
    assemble_report,
    email_report,
    rasterize_charts_async,
    render,
    validate_recipient,
)
from report.delivery import Mailer
from report.models import CurrentUser
from report.renderer import RenderedDocument

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Carbon Prospect Emissions Reports",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api", tags=["reports"])


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ReportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    emissions_data: dict[str, Any] = Field(default_factory=dict)
    reduction_strategies: list[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("reductionStrategies", "reduction_strategies", "strategies"),
    )
    organization_info: dict[str, Any] = Field(default_factory=dict)
    scenarios: list[Any] = Field(default_factory=list)
    current_user: Optional[CurrentUser] = None
    project_id: Optional[str] = None
    report_date: Optional[date] = None
    verification_status: Optional[str] = None
    report_preparer: Optional[str] = None
    save: bool = False
    chart_images: dict[str, str] = Field(
        default_factory=dict,
        description="Chart id -> base64 PNG/JPEG (a data: URL prefix is accepted).",
    )
    rasterize_charts: bool = False


class EmailRequest(ReportRequest):
    recipient: str


class EmailResponse(BaseModel):
    report_id: str
    recipient: str
    filename: str
    page_count: int
    fallback: bool


class HealthResponse(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_store() -> ReportStore:
    return ReportStore(get_settings().report_store_path)


async def get_mailer() -> AsyncIterator[Mailer]:
    settings = get_settings()
    if not settings.sendgrid_api_key:
        raise HTTPException(status_code=503, detail="Email delivery is not configured")
    async with SendGridMailer(settings) as mailer:
        yield mailer


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _assemble(body: ReportRequest) -> ReportRecord:
    context = ReportingContext(
        project_id=body.project_id,
        today=body.report_date,
        current_user=body.current_user,
        verification_status=body.verification_status,
        report_preparer=body.report_preparer,
    )
    return assemble_report(
        body.emissions_data,
        body.reduction_strategies,
        body.organization_info,
        body.scenarios,
        context,
    )


def _decode_charts(encoded: dict[str, str]) -> dict[str, bytes]:
    charts = {}
    for chart_id, value in encoded.items():
        payload = value.split(",", 1)[1] if value.startswith("data:") else value
        try:
            charts[chart_id] = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Chart %s is not valid base64; skipping", chart_id)
    return charts


async def _render(body: ReportRequest, report: ReportRecord) -> RenderedDocument:
    if body.rasterize_charts:
        charts = await rasterize_charts_async(report)
    else:
        charts = _decode_charts(body.chart_images)
    try:
        return await asyncio.to_thread(render, report, charts)
    except ReportRenderError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/health")
async def health() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get("/emission-factors")
async def emission_factors() -> dict[str, Any]:
    return {key: factor.model_dump() for key, factor in EMISSION_FACTORS.items()}


@router.post("/reports")
async def create_report(body: ReportRequest, store: ReportStore = Depends(get_store)) -> ReportRecord:
    """Assemble the report record; saved to the store when ``save`` is set."""
    report = _assemble(body)
    if body.save:
        store.save(report)
    return report


@router.post("/reports/pdf")
async def report_pdf(body: ReportRequest, store: ReportStore = Depends(get_store)) -> Response:
    report = _assemble(body)
    if body.save:
        store.save(report)
    document = await _render(body, report)
    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Report-Id": report.report_id,
            "X-Report-Fallback": str(document.fallback).lower(),
        },
    )


@router.post("/reports/email")
async def report_email(body: EmailRequest, mailer: Mailer = Depends(get_mailer)) -> EmailResponse:
    """Validate the recipient first; nothing is rendered or sent for a bad address."""
    try:
        recipient = validate_recipient(body.recipient)
    except InvalidRecipientError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    report = _assemble(body)
    document = await _render(body, report)
    try:
        await email_report(report, recipient, mailer, document=document)
    except MailerAuthError as exc:
        logger.error("Mail provider rejected credentials: %s", exc)
        raise HTTPException(status_code=502, detail="Mail provider rejected credentials")
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=502, detail=f"Email delivery failed: {exc}")

    return EmailResponse(
        report_id=report.report_id,
        recipient=recipient,
        filename=document.filename,
        page_count=document.page_count,
        fallback=document.fallback,
    )


@router.get("/reports/{report_id}")
async def get_report(report_id: str, store: ReportStore = Depends(get_store)) -> dict[str, Any]:
    snapshot = store.get(report_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    return snapshot


@router.delete("/reports/{report_id}", status_code=204)
async def delete_report(report_id: str, store: ReportStore = Depends(get_store)) -> Response:
    if not store.delete(report_id):
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    return Response(status_code=204)


app.include_router(router)
