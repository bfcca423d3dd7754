from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps, Timestamps
from app.utils.dates import IsoDatetime


# ============= TABLEROS =============
class AnalyticsDashboardUpdateRequest(BaseModel):
    dashboard_type: Optional[str] = None
    configuration: Optional[str] = None
    status: Optional[str] = None
    last_run_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

class AnalyticsDashboard(SoftDeleteTimestamps):
    id: str
    dashboard_type: str
    configuration: str
    status: str
    last_run_at: Optional[IsoDatetime] = None


# ============= ANÁLISIS DE SENTIMIENTO =============
class SentimentAnalysisSearchRequest(PageRequest):
    product_id: Optional[str] = None
    user_id: Optional[str] = None
    sentiment_category: Optional[str] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    analysis_date_from: Optional[datetime] = None
    analysis_date_to: Optional[datetime] = None
    orderBy: Optional[str] = None
    orderDirection: Optional[str] = None

class SentimentAnalysis(Timestamps):
    id: str
    product_id: str
    user_id: Optional[str] = None
    sentiment_score: float
    sentiment_category: str
    analysis_date: IsoDatetime


# ============= RECOMENDACIONES =============
class AiRecommendationSearchRequest(PageRequest):
    recommendation_type: Optional[str] = None
    algorithm_version: Optional[str] = None
    status: Optional[str] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None

class AiRecommendation(SoftDeleteTimestamps):
    id: str
    user_id: str
    recommendation_type: str
    algorithm_version: str
    payload: str
    status: str
