from typing import List, Optional
from pydantic import BaseModel, Field

UNAVAILABLE = "Unavailable"

class TideReading(BaseModel):
    """Single CO-OPS water level reading"""
    t: str = Field(..., description="Time of reading")
    v: str = Field(..., description="Water level in feet")

class TideLevelResponse(BaseModel):
    """CO-OPS water_level payload"""
    data: Optional[List[TideReading]] = None

class TidePrediction(BaseModel):
    """Individual hi/lo tide prediction"""
    t: str = Field(..., description="Time of prediction")
    v: str = Field(..., description="Height of tide in feet")
    type: str = Field(..., description="H for high tide, L for low tide")

class TidePredictionsResponse(BaseModel):
    """CO-OPS predictions payload"""
    predictions: Optional[List[TidePrediction]] = None

class TideOutlook(BaseModel):
    """Next two predicted tide extremes, already formatted for display"""
    next_tide: Optional[str] = None
    next_tide_after: Optional[str] = None
