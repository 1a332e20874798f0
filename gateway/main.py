"""Gateway Service - triage and outcomes API

Usage:
    PYTHONPATH=. python -m gateway.main

Port: 8000 (default)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import os
from typing import Optional

from dotenv import load_dotenv
load_dotenv(override=True)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from gateway.models import (
    AppAssessmentRequest,
    AppAssessmentResponse,
    AppOutcomeRequest,
    AppOutcomeResponse,
    AppOutcomeSummaryResponse,
    AppQuestionnaireResponse,
)
from outcomes.services import (
    OutcomeService,
    QuestionnaireNotFoundError,
    map_pain_location_to_condition,
)
from shared.catalog import CachedCatalogReader, CatalogUnavailableError, JsonCatalogReader
from shared.storage import InMemoryResultSink, ResultSink
from shared.utils import TTLCache, get_logger
from triage.config import settings
from triage.pipeline import RecommendationBuilder
from triage.services import SafetyNoteAssistant

logger = get_logger("gateway")

# services (singletons, created at startup)
recommendation_builder: Optional[RecommendationBuilder] = None
outcome_service: Optional[OutcomeService] = None
result_sink: Optional[ResultSink] = None


def init_services(catalog=None, sink: Optional[ResultSink] = None) -> None:
    """Create the service singletons (JSON catalog under data_dir by default)"""
    global recommendation_builder, outcome_service, result_sink

    if catalog is None:
        catalog = CachedCatalogReader(
            JsonCatalogReader(settings.data_dir),
            TTLCache(settings.catalog_cache_ttl_seconds),
        )
    result_sink = sink or InMemoryResultSink()
    recommendation_builder = RecommendationBuilder(
        catalog,
        safety_assistant=SafetyNoteAssistant() if settings.safety_assistant_enabled else None,
    )
    outcome_service = OutcomeService(catalog, result_sink)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifecycle"""
    logger.info("Gateway Service starting...")
    if recommendation_builder is None:
        init_services()
    logger.info("Gateway Service ready")
    yield
    logger.info("Gateway Service stopped")


app = FastAPI(
    title="Triage Gateway API",
    description="Risk triage, exercise recommendation and outcome scoring API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_payload(error: Exception, hint: str = None) -> dict:
    """Error response payload"""
    return {
        "error": str(error),
        "type": type(error).__name__,
        "hint": hint,
    }


def _catalog_unavailable(error: CatalogUnavailableError) -> HTTPException:
    logger.error(f"Catalog read failed: {error}")
    return HTTPException(
        status_code=503,
        detail=_error_payload(error, hint="Check DATA_DIR and the catalog JSON files."),
    )


@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "service": "gateway",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.post("/api/v1/assessments", response_model=AppAssessmentResponse)
def create_assessment(request: AppAssessmentRequest):
    """Triage an assessment and recommend exercises

    Critical risk returns no recommendations and immediate-care next steps.
    """
    try:
        result = recommendation_builder.build(request.to_record())
    except CatalogUnavailableError as e:
        raise _catalog_unavailable(e)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=_error_payload(e, hint="Check painLevel (0-10) and the postOp block."),
        )

    result_sink.save_assessment(result)
    return AppAssessmentResponse.from_result(result)


@app.get("/api/v1/assessments/latest", response_model=AppAssessmentResponse)
def latest_assessment():
    """Most recent assessment result"""
    result = result_sink.latest_assessment()
    if result is None:
        raise HTTPException(
            status_code=404,
            detail=_error_payload(LookupError("No assessments yet")),
        )
    return AppAssessmentResponse.from_result(result)


@app.get("/api/v1/questionnaires/{key}", response_model=AppQuestionnaireResponse)
def get_questionnaire(key: str):
    """Questionnaire with items in display order"""
    try:
        questionnaire, items = outcome_service.get_questionnaire(key)
    except QuestionnaireNotFoundError as e:
        raise HTTPException(status_code=404, detail=_error_payload(e))
    except CatalogUnavailableError as e:
        raise _catalog_unavailable(e)
    return AppQuestionnaireResponse.from_questionnaire(questionnaire, items)


@app.post("/api/v1/outcomes/{questionnaire_key}", response_model=AppOutcomeResponse)
def submit_outcome(questionnaire_key: str, request: AppOutcomeRequest):
    """Score and store a questionnaire submission"""
    condition_tag = request.condition_tag or map_pain_location_to_condition(
        request.pain_location or ""
    )
    if not condition_tag:
        raise HTTPException(
            status_code=400,
            detail=_error_payload(
                ValueError("conditionTag or painLocation is required"),
                hint="e.g. conditionTag=back",
            ),
        )

    try:
        assessment = outcome_service.score_submission(
            questionnaire_key,
            request.responses,
            request.context_type,
            condition_tag,
            related_assessment_id=request.related_assessment_id,
        )
    except QuestionnaireNotFoundError as e:
        raise HTTPException(
            status_code=404,
            detail=_error_payload(e, hint="Known keys: odi, koos, quickdash, nprs, groc"),
        )
    except CatalogUnavailableError as e:
        raise _catalog_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=_error_payload(e))

    return AppOutcomeResponse.from_assessment(assessment)


@app.get(
    "/api/v1/outcomes/{condition_tag}/summary",
    response_model=AppOutcomeSummaryResponse,
)
def outcome_summary(condition_tag: str):
    """Baseline vs latest outcome comparison"""
    try:
        summary = outcome_service.summary(condition_tag)
    except CatalogUnavailableError as e:
        raise _catalog_unavailable(e)
    return AppOutcomeSummaryResponse.from_summary(
        summary, outcome_service.needs_follow_up(condition_tag)
    )


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("GATEWAY_HOST", settings.host)
    port = int(os.getenv("GATEWAY_PORT", str(settings.port)))

    logger.info(f"Gateway Service: http://{host}:{port}")
    uvicorn.run(
        "gateway.main:app",
        host=host,
        port=port,
        reload=True,
    )
