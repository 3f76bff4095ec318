# parking_manager/utils/dependencies.py
from fastapi import Request
from parking_manager.services.parking_manager import ParkingManager


def get_manager(request: Request) -> ParkingManager:
    """FastAPI dependency: the ParkingManager built at startup."""
    return request.app.state.manager
