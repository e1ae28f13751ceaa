"""Mood trend analysis and chart routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from moods.charts import load_chart
from moods.presentation import chart_legend
from moods.storage import MoodStore, MoodStoreError
from moods.trends import analyze_mood_trends
from shared_types import ChartMode, ChartRange, TrendRange
from web.auth import get_current_user
from web.deps import get_mood_store
from web.models import ChartOut, ChartPointOut, TrendAnalysisOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api/trends", tags=["trends"])


@router.get("/analysis", response_model=TrendAnalysisOut)
async def get_analysis(
    time_range: TrendRange = TrendRange.LAST_7_DAYS,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    """Average, distribution and summary over the last 7 or 30 days."""
    analysis = analyze_mood_trends(store, user["id"], time_range)
    if not analysis.ok:
        raise HTTPException(status_code=503, detail=analysis.summary)
    return TrendAnalysisOut(time_range=time_range, **analysis.to_dict())


@router.get("/chart", response_model=ChartOut)
async def get_chart(
    time_range: ChartRange = ChartRange.WEEKLY,
    mode: ChartMode = ChartMode.DISTRIBUTION,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    """Per-day series for the stacked distribution or daily-average chart."""
    try:
        points = load_chart(store, user["id"], time_range, mode)
    except MoodStoreError as e:
        logger.error("trends.chart_error", user_id=user["id"], error=str(e))
        raise HTTPException(status_code=503, detail=f"Chart data is unavailable: {e}")
    return ChartOut(
        time_range=time_range,
        mode=mode,
        points=[ChartPointOut(**p.to_dict()) for p in points],
        legend=chart_legend() if mode == ChartMode.DISTRIBUTION else [],
    )
