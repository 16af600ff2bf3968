# api/v1/endpoints/health.py
from fastapi import APIRouter
from datetime import datetime
from core.config import get_settings

router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": get_settings().api_title
    }
