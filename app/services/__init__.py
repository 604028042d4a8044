"""
Services Package
"""
from app.services.scoring_service import ScoringService, ScoreResult
from app.services.analytics_service import AnalyticsService, FormAnalytics, ResponseSnapshot

__all__ = ['ScoringService', 'ScoreResult', 'AnalyticsService', 'FormAnalytics', 'ResponseSnapshot']
