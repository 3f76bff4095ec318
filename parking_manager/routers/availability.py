# parking_manager/routers/availability.py
"""Daily availability under pico y placa, and the dashboard figures."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from parking_manager.schemas.availability import DailyAvailability, DashboardOut
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager

router = APIRouter()


@router.get("/analytics/availability", response_model=DailyAvailability,
            summary="Spaces available, restricted, occupied and excluded on a date")
def get_availability(on: Optional[date] = Query(None, alias="date"),
                     manager: ParkingManager = Depends(get_manager)):
    """
    Defaults to today. Spaces whose holder is under pico y placa that
    weekday are listed as `restricted`: free for the day.
    """
    return manager.availability(on)


@router.get("/analytics/dashboard", response_model=DashboardOut, summary="Dashboard statistics")
def get_dashboard(on: Optional[date] = Query(None, alias="date"),
                  manager: ParkingManager = Depends(get_manager)):
    return manager.dashboard(on)
