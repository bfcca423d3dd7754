import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.analytics import AnalyticsDashboard, SentimentAnalysis, AiRecommendation
from app.models.analytics import (
    AnalyticsDashboardUpdateRequest,
    AnalyticsDashboard as AnalyticsDashboardDto,
    SentimentAnalysisSearchRequest,
    SentimentAnalysis as SentimentAnalysisDto,
    AiRecommendationSearchRequest,
    AiRecommendation as AiRecommendationDto,
)
from app.utils.auth import ActorPayload, admin_user, member_user
from app.utils.pagination import Page, paginate, sort_clause
from app.utils.queries import (
    apply_changes,
    filter_contains,
    filter_eq,
    filter_range,
    find_or_404,
    live,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Analítica"]
)

SENTIMENT_SORT_FIELDS = ("analysis_date", "sentiment_score", "sentiment_category", "created_at")


# ============= TABLEROS =============
@router.put("/adminUser/analyticsDashboards/{analyticsDashboardId}", response_model=AnalyticsDashboardDto)
def update_analytics_dashboard(
    analyticsDashboardId: str,
    body: AnalyticsDashboardUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Actualizar un tablero; dashboard_type es único entre los vigentes"""
    dashboard = find_or_404(db, AnalyticsDashboard, analyticsDashboardId, "Tablero no encontrado")

    if body.dashboard_type and body.dashboard_type != dashboard.dashboard_type:
        taken = (
            live(db.query(AnalyticsDashboard), AnalyticsDashboard)
            .filter(
                AnalyticsDashboard.dashboard_type == body.dashboard_type,
                AnalyticsDashboard.id != dashboard.id,
            )
            .first()
        )
        if taken:
            raise HTTPException(status_code=409, detail="Ya existe un tablero de ese tipo")

    apply_changes(dashboard, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(dashboard)

    logger.info("Tablero %s actualizado por %s", dashboard.id, admin.id)
    return dashboard


# ============= ANÁLISIS DE SENTIMIENTO =============
@router.patch("/adminUser/sentimentAnalysis", response_model=Page[SentimentAnalysisDto])
def search_sentiment_analysis(
    body: SentimentAnalysisSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    query = db.query(SentimentAnalysis)
    query = filter_eq(query, SentimentAnalysis.product_id, body.product_id)
    query = filter_eq(query, SentimentAnalysis.user_id, body.user_id)
    query = filter_contains(query, SentimentAnalysis.sentiment_category, body.sentiment_category)
    query = filter_range(query, SentimentAnalysis.sentiment_score, body.min_score, body.max_score)
    query = filter_range(query, SentimentAnalysis.analysis_date, body.analysis_date_from, body.analysis_date_to)

    order_by = sort_clause(
        SentimentAnalysis, body.orderBy, body.orderDirection, SENTIMENT_SORT_FIELDS,
        default_field="analysis_date",
    )
    return paginate(query, body.page, body.limit, order_by)


# ============= RECOMENDACIONES =============
@router.patch("/memberUser/aiRecommendations", response_model=Page[AiRecommendationDto])
def search_ai_recommendations(
    body: AiRecommendationSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Recomendaciones generadas para el miembro"""
    query = live(db.query(AiRecommendation), AiRecommendation).filter(AiRecommendation.user_id == member.id)
    query = filter_eq(query, AiRecommendation.recommendation_type, body.recommendation_type)
    query = filter_eq(query, AiRecommendation.algorithm_version, body.algorithm_version)
    query = filter_eq(query, AiRecommendation.status, body.status)
    query = filter_range(query, AiRecommendation.created_at, body.created_at_from, body.created_at_to)

    return paginate(query, body.page, body.limit, [AiRecommendation.created_at.desc()])
