# agents/irrigation/models.py
"""
Pydantic models for irrigation agent
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Optional, Dict, Any, Literal, Union
from datetime import date as dt_date, datetime

from agents.irrigation.constants import MAX_FIELD_SIZE_HECTARES

GrowthStage = Literal["initial", "development", "mid", "late"]
Status = Literal["urgent", "needed", "skip", "optimal", "monitor"]
Priority = Literal["high", "medium", "low"]
Action = Literal["irrigate_now", "irrigate_soon", "wait_for_rain", "monitor", "assess_tomorrow"]
Timing = Literal["within_2_hours", "within_24_hours", "after_rainfall", "next_assessment", "tomorrow"]

class RecommendationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude of the field")
    lon: float = Field(..., ge=-180, le=180, description="Longitude of the field")
    crop_type: str = Field("unknown", description="Crop type (e.g., tomato, maize, rice)")
    growth_stage: GrowthStage = Field("mid", description="Current crop growth stage")
    soil_type: Optional[str] = Field(None, description="Soil texture (sandy, loam, clay, ...)")
    field_size_hectares: float = Field(1.0, gt=0, le=MAX_FIELD_SIZE_HECTARES, description="Field size in hectares")
    last_irrigation_date: Optional[datetime] = Field(None, description="When the field was last irrigated")

# ---------- Environmental snapshots ----------

class CurrentWeather(BaseModel):
    temperature: float = Field(..., description="Air temperature in °C")
    humidity: float = Field(..., description="Relative humidity in %")
    wind_speed: float = Field(0.0, description="Wind speed in km/h")
    solar_radiation: Optional[float] = Field(None, description="Solar radiation proxy")
    summary: Optional[str] = None

class DailyForecast(BaseModel):
    date: Optional[dt_date] = None
    precipitation: Optional[float] = Field(0.0, description="Daily precipitation sum in mm")
    precipitation_probability: Optional[float] = 0.0
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    summary: Optional[str] = None

class WeatherSnapshot(BaseModel):
    current: CurrentWeather
    forecast: List[DailyForecast] = Field(..., min_length=1)
    source: str = "Open-Meteo"

class MeasuredSoil(BaseModel):
    """Soil snapshot backed by a provider measurement"""
    provenance: Literal["measured"] = "measured"
    type: str = "loam"
    moisture_percentage: float = Field(..., description="Root-zone moisture, 0-100")
    temp_surface: Optional[float] = None
    temp_root: Optional[float] = None
    ph: Optional[float] = None
    organic_matter: Optional[float] = None
    drainage: Optional[str] = None
    water_holding_capacity: Optional[float] = Field(None, description="mm per metre")
    source: str = "Open-Meteo"

class DefaultSoil(BaseModel):
    """Soil snapshot synthesized from the texture table"""
    provenance: Literal["default"] = "default"
    type: str = "unknown"
    assumed_moisture_percentage: Optional[float] = Field(
        None, description="Moisture assumed at last irrigation, 0-100"
    )
    ph: Optional[float] = None
    organic_matter: Optional[float] = None
    drainage: Optional[str] = "moderate"
    water_holding_capacity: Optional[float] = Field(None, description="mm per metre")
    source: str = "default"

SoilSnapshot = Annotated[Union[MeasuredSoil, DefaultSoil], Field(discriminator="provenance")]

class PollenReading(BaseModel):
    birch: float = 0.0
    grass: float = 0.0
    olive: float = 0.0
    ragweed: float = 0.0

class AirQualitySnapshot(BaseModel):
    aqi: Optional[float] = None
    pm10: Optional[float] = None
    pm2_5: Optional[float] = None
    uv_index: Optional[float] = None
    pollen: PollenReading = Field(default_factory=PollenReading)
    source: str = "Open-Meteo"

# ---------- Engine outputs ----------

class ETEstimate(BaseModel):
    et0: float = Field(..., description="Reference evapotranspiration, mm/day")
    et_crop: float = Field(..., description="Crop evapotranspiration, mm/day")
    crop_coefficient: float

class WaterBalance(BaseModel):
    current_moisture: float = Field(..., description="Water currently held in the root zone, mm")
    total_capacity: float = Field(..., description="Root-zone capacity, mm")
    moisture_percentage: int
    is_critical: bool
    is_optimal: bool

class IrrigationWindow(BaseModel):
    time: str
    reason: str
    efficiency: int

class OptimalTimes(BaseModel):
    recommended: List[IrrigationWindow]
    avoid: List[IrrigationWindow]
    best: IrrigationWindow

class ConservationTip(BaseModel):
    tip: str
    impact: Literal["high", "medium", "low"]
    savings: str

class CostEstimate(BaseModel):
    water: float
    energy: float
    total: float
    currency: str

class EnvironmentalImpact(BaseModel):
    co2_footprint: float = Field(..., description="kg CO2")
    sustainability: Literal["excellent", "good", "moderate", "concerning"]
    water_efficiency: Literal["high", "low"]
    recommendation: str

class DataSource(BaseModel):
    weather: Literal["real", "unavailable"] = "real"
    soil: Literal["real", "limited"]
    reliability: Literal["high", "limited"]

    @classmethod
    def for_soil(cls, soil: Union[MeasuredSoil, DefaultSoil]) -> "DataSource":
        if isinstance(soil, MeasuredSoil):
            return cls(soil="real", reliability="high")
        return cls(soil="limited", reliability="limited")

class Recommendation(BaseModel):
    status: Status
    priority: Priority
    action: Action
    amount_liters: int = Field(..., ge=0)
    timing: Timing
    reason: str
    optimal_times: OptimalTimes
    conservation_tips: List[ConservationTip]
    next_assessment: datetime
    cost_estimate: CostEstimate
    environmental_impact: EnvironmentalImpact
    data_source: Optional[DataSource] = None

# ---------- Result envelope ----------

class DataWarning(BaseModel):
    code: str
    message: str
    detail: Optional[str] = None

class SoilUnavailableWarning(DataWarning):
    """Soil provider was down; defaults were used in its place"""
    code: Literal["soil_unavailable"] = "soil_unavailable"
    message: str = (
        "Soil data unavailable - using default soil properties. "
        "Recommendations may be less accurate."
    )

class DataAvailability(BaseModel):
    weather: bool = False
    soil: bool = False
    air_quality: bool = False
    has_real_data: bool = False

class RecommendationMetadata(BaseModel):
    calculated_at: datetime
    location: Dict[str, float]
    crop: Dict[str, str]
    field_size_hectares: float
    data_availability: DataAvailability
    warnings: List[DataWarning] = Field(default_factory=list)
    soil_error: Optional[str] = None
    status: Literal["success", "partial_success"] = "success"
    data_reliability: Literal["high", "limited"] = "high"

class RecommendationResult(BaseModel):
    recommendation: Recommendation
    water_balance: WaterBalance
    evapotranspiration: ETEstimate
    weather: WeatherSnapshot
    soil: SoilSnapshot
    air_quality: Optional[AirQualitySnapshot] = None
    metadata: RecommendationMetadata

class IrrigationResponse(BaseModel):
    success: bool
    data: RecommendationResult
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
