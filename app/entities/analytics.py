from sqlalchemy import Column, String, DateTime, Numeric, Text, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


class AnalyticsDashboard(Base):
    __tablename__ = "shopping_mall_analytics_dashboards"

    id = Column(String(36), primary_key=True, default=new_id)
    # Único entre los tableros no eliminados
    dashboard_type = Column(String(100), nullable=False)
    configuration = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default="active")
    last_run_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SentimentAnalysis(Base):
    __tablename__ = "shopping_mall_sentiment_analysis"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=True, index=True)
    sentiment_score = Column(Numeric(6, 4), nullable=False)
    sentiment_category = Column(String(100), nullable=False)
    analysis_date = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class AiRecommendation(Base):
    __tablename__ = "shopping_mall_ai_recommendations"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=False, index=True)
    recommendation_type = Column(String(100), nullable=False)
    algorithm_version = Column(String(50), nullable=False)
    payload = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)
