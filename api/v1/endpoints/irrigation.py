# api/v1/endpoints/irrigation.py
from fastapi import APIRouter, HTTPException, Query
import logging

from agents.base import agent_registry
from agents.irrigation.models import RecommendationRequest, IrrigationResponse
from core.exceptions import AgriloError, ExternalAPIError, RecommendationError

router = APIRouter()
logger = logging.getLogger(__name__)

def _get_agent():
    irrigation_agent = agent_registry.get("irrigation")
    if not irrigation_agent:
        raise HTTPException(status_code=500, detail="Irrigation agent not available")
    return irrigation_agent

@router.post("/recommendation", response_model=IrrigationResponse)
async def get_irrigation_recommendation(request: RecommendationRequest):
    """
    Get an irrigation recommendation for a field

    Combines current weather, the short-range forecast and root-zone soil
    moisture into an urgency rating, a water amount and timing advice.
    Responds 503 when weather is unavailable and 422 when neither weather
    nor soil data could be fetched.
    """
    irrigation_agent = _get_agent()
    try:
        return await irrigation_agent.execute(request)
    except RecommendationError as e:
        raise HTTPException(status_code=e.http_status, detail=str(e))
    except AgriloError as e:
        raise HTTPException(status_code=500, detail=f"Error processing irrigation request: {str(e)}")

@router.get("/weather")
async def get_weather_preview(
    lat: float = Query(..., ge=-90, le=90, description="Latitude of the location"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude of the location"),
    days: int = Query(7, ge=1, le=14, description="Number of days to preview")
):
    """Get weather forecast annotated for irrigation planning"""
    irrigation_agent = _get_agent()
    try:
        preview = await irrigation_agent.get_weather_preview(lat, lon, days)
    except ExternalAPIError as e:
        logger.error(f"Failed to retrieve weather forecast: {e}")
        raise HTTPException(status_code=503, detail=f"Weather data unavailable: {str(e)}")
    return {"success": True, **preview}

@router.get("/crops")
async def get_crop_recommendations():
    """Get available crop types with their characteristics"""
    irrigation_agent = _get_agent()
    crops = await irrigation_agent.get_crop_recommendations()
    return {
        "success": True,
        "crops": crops,
        "note": "Unrecognized crops use the default coefficient row"
    }

@router.get("/soils")
async def get_soil_types():
    """Get available soil texture types"""
    irrigation_agent = _get_agent()
    soils = await irrigation_agent.get_soil_types()
    return {
        "success": True,
        "soil_types": soils,
        "note": "Soil texture affects water retention and irrigation frequency"
    }

@router.get("/health")
async def irrigation_health():
    """Check irrigation agent health"""
    irrigation_agent = agent_registry.get("irrigation")
    if not irrigation_agent:
        return {"status": "unhealthy", "error": "Irrigation agent not available"}

    return await irrigation_agent.health_check()
