# rythm/api/routes/insights_routes.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, Optional

from rythm.config.config_manager import ConfigManager
from rythm.core.models.data_models import Entry, EntryInput
from rythm.core.models.output_models import MotivationMessage, ReportData, StatsResult
from rythm.core.repositories.entry_repository import EntryRepository
from rythm.core.services.insights_service import InsightsService


# Dependency
def get_insights_service():
    config = ConfigManager()
    repository = EntryRepository(config.get('data.data_dir', 'data'))
    return InsightsService(repository, config)


router = APIRouter(
    prefix="/insights",
    tags=["Insights"],
    responses={404: {"description": "Not found"}}
)


@router.post("/entries", response_model=Entry, status_code=201)
def log_entry(entry: EntryInput, service: InsightsService = Depends(get_insights_service)):
    """Create or update the entry for a user's day"""
    try:
        return service.log_entry(entry)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{user_id}/stats", response_model=StatsResult)
def get_stats(user_id: str, as_of: Optional[date] = None,
                    service: InsightsService = Depends(get_insights_service)):
    """Get all derived statistics for a user"""
    try:
        return service.get_stats(user_id, today=as_of)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{user_id}/badges", response_model=Dict)
def get_badges(user_id: str, as_of: Optional[date] = None,
                     service: InsightsService = Depends(get_insights_service)):
    """Get tiered and sleep-consistency badges for a user"""
    try:
        return service.get_badges(user_id, today=as_of)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{user_id}/motivation", response_model=MotivationMessage)
def get_motivation(user_id: str, as_of: Optional[date] = None,
                         service: InsightsService = Depends(get_insights_service)):
    """Get today's motivation message for a user"""
    try:
        return service.get_motivation(user_id, today=as_of)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{user_id}/report", response_model=ReportData)
def get_report(user_id: str, range_days: Optional[int] = None, as_of: Optional[date] = None,
                     service: InsightsService = Depends(get_insights_service)):
    """Get report data comparing the recent window with the one before it"""
    if range_days is not None and range_days < 1:
        raise HTTPException(status_code=400, detail="range_days must be a positive number of days")
    try:
        return service.get_report(user_id, range_days=range_days, today=as_of)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
