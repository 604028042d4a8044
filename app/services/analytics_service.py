"""
Analytics Service
Summary statistics over a form's stored responses.
Always recomputed from the current rows, never cached.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

import pytz

EXCELLENT = 'excellent'
GOOD = 'good'
AVERAGE = 'average'
POOR = 'poor'

SCORE_BANDS = (EXCELLENT, GOOD, AVERAGE, POOR)


@dataclass(frozen=True)
class ResponseSnapshot:
    """The fields analytics needs from a stored response"""
    score: int = 0
    max_score: int = 0
    completion_time: float = 0
    submitted_at: Optional[datetime] = None


@dataclass
class FormAnalytics:
    total_responses: int = 0
    average_score: float = 0
    average_completion_time: float = 0
    responses_by_day: Dict[str, int] = field(default_factory=dict)
    score_distribution: Dict[str, int] = field(
        default_factory=lambda: {band: 0 for band in SCORE_BANDS}
    )

    def to_dict(self):
        return {
            'totalResponses': self.total_responses,
            'averageScore': self.average_score,
            'averageCompletionTime': self.average_completion_time,
            'responsesByDay': dict(self.responses_by_day),
            'scoreDistribution': dict(self.score_distribution),
        }


class AnalyticsService:
    """Service for form analytics"""

    @staticmethod
    def score_percentage(score, max_score):
        """Score as a 0-100 percentage; 0 when nothing was scorable"""
        if not max_score or max_score <= 0:
            return 0.0
        # Multiply first so band edges (e.g. 9/10 -> 90) stay exact
        return score * 100 / max_score

    @staticmethod
    def score_band(percentage):
        if percentage >= 90:
            return EXCELLENT
        if percentage >= 70:
            return GOOD
        if percentage >= 50:
            return AVERAGE
        return POOR

    @staticmethod
    def calendar_day(submitted_at, tz):
        """ISO date of a submission in the given timezone; naive values are UTC"""
        if submitted_at.tzinfo is None:
            submitted_at = pytz.utc.localize(submitted_at)
        return submitted_at.astimezone(tz).date().isoformat()

    @staticmethod
    def build_analytics(responses, tz=None):
        """
        Aggregate responses into FormAnalytics

        Args:
            responses: objects with score, max_score, completion_time and
                submitted_at (Response rows or ResponseSnapshot)
            tz: timezone name or tzinfo for day buckets (default UTC)

        Returns:
            FormAnalytics
        """
        if tz is None:
            tz = pytz.utc
        elif isinstance(tz, str):
            tz = pytz.timezone(tz)

        analytics = FormAnalytics()
        responses = list(responses)
        if not responses:
            return analytics

        percentage_total = 0.0
        time_total = 0.0

        for response in responses:
            percentage = AnalyticsService.score_percentage(response.score, response.max_score)
            percentage_total += percentage
            time_total += response.completion_time or 0

            analytics.score_distribution[AnalyticsService.score_band(percentage)] += 1

            if response.submitted_at is not None:
                day = AnalyticsService.calendar_day(response.submitted_at, tz)
                analytics.responses_by_day[day] = analytics.responses_by_day.get(day, 0) + 1

        analytics.total_responses = len(responses)
        analytics.average_score = percentage_total / len(responses)
        analytics.average_completion_time = time_total / len(responses)
        return analytics
