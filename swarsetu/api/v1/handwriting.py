# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handwriting API endpoints.

This module provides endpoints for handwriting screening:
- POST /analyze - Analyze one capture
- GET /prompts - Get drawing prompts for a language and grade
- POST /sessions/report - Analyze a multi-prompt session and build its report

Example:
    POST /api/v1/handwriting/analyze
    {
        "strokes": [{"points": [{"x": 10, "y": 10, "time": 0},
                                {"x": 110, "y": 10, "time": 500}]}],
        "total_time_ms": 500,
        "canvas_width": 300,
        "canvas_height": 300,
        "student_name": "Asha",
        "grade_num": 3
    }
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from swarsetu.core.config import get_settings
from swarsetu.core.handwriting.engine import HandwritingService, get_handwriting_service
from swarsetu.core.handwriting.models import Stroke, StrokePoint
from swarsetu.core.handwriting.prompts import (
    DysgraphiaPrompt,
    get_dysgraphia_prompts,
    grade_band,
)
from swarsetu.core.handwriting.session import DrawingResult, DrawingSession
from swarsetu.core.handwriting.validation import CaptureValidationError
from swarsetu.utils.logging import get_logger, log_context

logger = get_logger(__name__)

router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================


class StrokePointModel(BaseModel):
    """One pen/touch sample."""

    x: float = Field(description="Horizontal position in pixels")
    y: float = Field(description="Vertical position in pixels")
    time: float = Field(description="Capture timestamp in milliseconds")


class StrokeModel(BaseModel):
    """One continuous gesture."""

    points: list[StrokePointModel] = Field(default_factory=list)
    width: float = Field(default=3.0, description="Rendered line width")

    def to_stroke(self) -> Stroke:
        """Convert to the engine stroke type."""
        return Stroke(
            points=tuple(StrokePoint(p.x, p.y, p.time) for p in self.points),
            width=self.width,
        )


class AnalyzeRequest(BaseModel):
    """Request to analyze one capture."""

    strokes: list[StrokeModel] = Field(default_factory=list)
    total_time_ms: float = Field(default=0.0, description="Capture duration in ms")
    canvas_width: float | None = Field(
        default=None,
        description="Canvas width in pixels (settings default when omitted)",
    )
    canvas_height: float | None = Field(
        default=None,
        description="Canvas height in pixels (settings default when omitted)",
    )
    prompt_type: str = Field(
        default="letter",
        examples=["letter", "word", "shape", "figure"],
    )
    student_name: str = Field(default="Student", max_length=200)
    grade_num: int | None = Field(default=None, ge=1, le=12)
    language: str | None = Field(default=None, examples=["en", "hi"])


class PromptModel(BaseModel):
    """Drawing prompt answered in a session."""

    type: str = Field(default="letter")
    prompt: str
    reference: str = ""
    difficulty: int = Field(default=1, ge=1, le=3)
    grade_level: str = "1-2"
    dsm5_domain: str = ""

    def to_prompt(self) -> DysgraphiaPrompt:
        """Convert to the prompt bank type."""
        return DysgraphiaPrompt(
            type=self.type,
            prompt=self.prompt,
            reference=self.reference,
            difficulty=self.difficulty,
            grade_level=self.grade_level,
            dsm5_domain=self.dsm5_domain,
        )


class DrawingModel(BaseModel):
    """One prompt's drawing."""

    prompt: PromptModel
    strokes: list[StrokeModel] = Field(default_factory=list)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    total_time_ms: float = 0.0


class SessionReportRequest(BaseModel):
    """Request to analyze a multi-prompt session."""

    student_name: str = Field(max_length=200)
    student_grade: str = Field(default="", examples=["Grade 4"])
    language: str | None = Field(default=None, examples=["en", "hi"])
    drawings: list[DrawingModel] = Field(default_factory=list)


# ============================================================================
# Response Models
# ============================================================================


class PromptResponse(BaseModel):
    """Drawing prompt."""

    type: str
    prompt: str
    reference: str
    difficulty: int
    grade_level: str
    dsm5_domain: str


class PromptListResponse(BaseModel):
    """Prompts for a language and grade."""

    language: str
    grade_band: str | None
    items: list[PromptResponse]
    total: int


# ============================================================================
# Helper Functions
# ============================================================================


def _validation_error(e: CaptureValidationError) -> HTTPException:
    logger.info(
        "Rejected invalid capture",
        reason=e.reason,
        stroke_index=e.stroke_index,
        point_index=e.point_index,
    )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=e.to_dict(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/analyze",
    summary="Analyze handwriting capture",
    description="Score one capture for dysgraphia indicators.",
)
async def analyze_capture(
    request: AnalyzeRequest,
    service: HandwritingService = Depends(get_handwriting_service),
) -> dict[str, Any]:
    """Analyze one capture.

    Args:
        request: Strokes, canvas and student details.
        service: Handwriting service.

    Returns:
        Analysis result in the report shape plus the disclaimer.

    Raises:
        HTTPException: 422 if the capture data is invalid.
    """
    settings = get_settings().handwriting
    language = request.language or service.default_language
    canvas_width = request.canvas_width
    if canvas_width is None:
        canvas_width = settings.default_canvas_width
    canvas_height = request.canvas_height
    if canvas_height is None:
        canvas_height = settings.default_canvas_height

    with log_context(student_name=request.student_name):
        try:
            result = service.analyze(
                [s.to_stroke() for s in request.strokes],
                request.total_time_ms,
                canvas_width,
                canvas_height,
                prompt_type=request.prompt_type,
                student_name=request.student_name,
                grade_num=request.grade_num or settings.default_grade,
                lang=language,
            )
        except CaptureValidationError as e:
            raise _validation_error(e) from e

    return {
        **result.to_dict(),
        "disclaimer": service.config.get_disclaimer(language),
    }


@router.get(
    "/prompts",
    response_model=PromptListResponse,
    summary="Get drawing prompts",
    description="Get the drawing prompts for a language and grade.",
)
async def list_prompts(
    language: Annotated[str, Query(max_length=10)] = "en",
    grade: Annotated[int | None, Query(ge=1, le=12)] = None,
) -> PromptListResponse:
    """Get drawing prompts.

    Unknown languages fall back to English.

    Args:
        language: Language code.
        grade: Numeric grade, all prompts when omitted.

    Returns:
        PromptListResponse with the selected prompts.
    """
    prompts = get_dysgraphia_prompts(
        language,
        grade,
        config_dir=get_settings().handwriting.config_dir,
    )
    items = [
        PromptResponse(
            type=p.type,
            prompt=p.prompt,
            reference=p.reference,
            difficulty=p.difficulty,
            grade_level=p.grade_level,
            dsm5_domain=p.dsm5_domain,
        )
        for p in prompts
    ]
    return PromptListResponse(
        language=language,
        grade_band=grade_band(grade) if grade is not None else None,
        items=items,
        total=len(items),
    )


@router.post(
    "/sessions/report",
    summary="Build session report",
    description="Analyze every drawing of a session and build the report payload.",
)
async def build_session_report(
    request: SessionReportRequest,
    service: HandwritingService = Depends(get_handwriting_service),
) -> dict[str, Any]:
    """Analyze a multi-prompt session.

    Args:
        request: Student details and drawings.
        service: Handwriting service.

    Returns:
        Session report payload.

    Raises:
        HTTPException: 422 if any drawing holds invalid data.
    """
    session = DrawingSession(
        request.student_name,
        request.student_grade,
        language=request.language,
        service=service,
    )
    for drawing in request.drawings:
        session.record(
            DrawingResult(
                prompt=drawing.prompt.to_prompt(),
                strokes=tuple(s.to_stroke() for s in drawing.strokes),
                canvas_width=drawing.canvas_width,
                canvas_height=drawing.canvas_height,
                total_time_ms=drawing.total_time_ms,
            )
        )

    with log_context(student_name=request.student_name):
        try:
            result = session.analyze()
            logger.info(
                "Session report built",
                drawings=len(request.drawings),
                risk_level=result.risk_level.value,
            )
        except CaptureValidationError as e:
            raise _validation_error(e) from e

    return session.build_report(result)
