# core/exceptions.py
"""
Custom exceptions for the backend
"""

class AgriloError(Exception):
    """Base exception for Agrilo backend"""
    pass

class AgentError(AgriloError):
    """Agent-related errors"""
    pass

class AgentConfigError(AgriloError):
    """Agent configuration errors"""
    pass

class ExternalAPIError(AgriloError):
    """External API errors"""
    pass

class WeatherDataUnavailable(ExternalAPIError):
    """Weather provider could not supply a usable snapshot"""
    pass

class SoilDataUnavailable(ExternalAPIError):
    """Soil provider could not supply a usable snapshot"""
    pass

class RecommendationError(AgentError):
    """A recommendation could not be produced for the request"""

    http_status: int = 500

class WeatherUnavailableError(RecommendationError):
    """Weather is missing, so evapotranspiration cannot be computed"""

    http_status = 503

class InsufficientDataError(RecommendationError):
    """Neither weather nor soil data could be obtained"""

    http_status = 422
