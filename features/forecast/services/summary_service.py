import logging
import math
import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from features.forecast.models.forecast_types import CurrentConditions, ForecastPeriod

logger = logging.getLogger(__name__)

# Wind speed thresholds (mph)
WIND_THRESHOLD_LOW = 10
WIND_THRESHOLD_MODERATE = 12
WIND_THRESHOLD_HIGH = 15
WIND_THRESHOLD_EPIC = 20

MIN_CONSECUTIVE_PERIODS_SUSTAINED = 3
GUST_RANGE_THRESHOLD = 5
WIND_SPEED_VARIANCE_THRESHOLD = 10
SIGNIFICANT_DIFFERENCE = 5  # mph between current wind and forecast average

# Temperature thresholds (Fahrenheit)
TEMP_WARM = 75
TEMP_COMFORTABLE = 60
TEMP_COOL = 45

NO_DATA_SUMMARY = "No forecast data available."
STORM_WARNING = "⚠️ Check conditions before heading out."

_WIND_SPEED_PATTERN = re.compile(r"(\d+)(?:-(\d+))?")

# Opening phrase pools
EASING_STRONG = [
    "💨 Still looking solid ahead!",
    "🌊 Conditions holding steady!",
    "⛵ Should stay pretty good!",
    "👍 Wind staying consistent!",
]
EASING_MODERATE = [
    "😊 Currently better than forecast!",
    "✨ Enjoy it while it lasts!",
    "🌬️ Making the most of current conditions!",
]
EASING_LIGHT = [
    "🍃 Wind might ease up.",
    "😌 Expecting lighter breeze ahead.",
    "🛶 Could mellow out later.",
]
STEADY_STRONG = [
    "🎯 Steady strong wind all day!",
    "⛵ Consistent solid conditions!",
    "🌊 Staying steady and strong!",
]
STEADY = [
    "👌 Nice and steady today!",
    "✨ Consistent breeze throughout!",
    "🌬️ Holding steady!",
]
EPIC = [
    "🔥 EPIC wind day ahead!",
    "⚡ OH YEAH! Major wind incoming!",
    "🌊 GET PUMPED! Gonna be MASSIVE!",
    "💨 WHOA! This is gonna be WILD!",
]
SUSTAINED_HIGH = [
    "🎉 Sweet! Solid wind all day!",
    "🚀 Nice! Gonna be some sick waves out there today!",
    "⛵ Perfect! Sustained wind coming through!",
    "🏄 Excellent! Great conditions ahead!",
]
SUSTAINED_MODERATE = [
    "👍 Looking good! Consistent wind today!",
    "✨ Decent! Should be fun out there!",
    "🌊 Not bad! Steady breeze coming in!",
    "⛵ Promising! Nice sailing conditions!",
]
PUFFS = [
    "👌 Some nice puffs expected!",
    "🌬️ Wind picking up at times!",
    "⛵ Moderate conditions ahead!",
]
LIGHT = [
    "😌 Light and easy today.",
    "🍃 Gentle breeze ahead.",
    "🛶 Mellow conditions expected.",
]

# Action recommendation pools
ACTION_SEND_IT = [
    "Get out there! 🎯",
    "Time to shred! 🤙",
    "Perfect day to get on the water! 💦",
    "Don't miss this! 🔥",
]
ACTION_FUN = [
    "Should be a fun session! 🌊",
    "Good day for some action! ⛵",
    "Decent conditions to play in! 🏄",
]
ACTION_CRUISE = [
    "Good for cruising. 🛶",
    "Nice for a relaxed paddle. 🚣",
    "Perfect for beginners! 👍",
]

class WeatherCategory(Enum):
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    MIXED = "mixed"

@dataclass
class WindCondition:
    avg_speed: float
    max_speed: float
    min_speed: float
    sustained_high_wind: bool  # 3+ consecutive periods above the moderate threshold
    gusty: bool

@dataclass
class ForecastComparison:
    is_current_stronger: bool
    is_forecast_stronger: bool
    is_similar: bool
    current_speed: float
    forecast_avg: float

def parse_wind_speed(wind_speed: str) -> Tuple[int, int]:
    """Parse "10 mph" or "10-15 mph" into (average, max)."""
    match = _WIND_SPEED_PATTERN.search(wind_speed or "")
    if not match:
        return 0, 0
    first = int(match.group(1))
    second = int(match.group(2)) if match.group(2) else first
    return first, second

def _round(value: float) -> int:
    """Round half up, so 12.5 mph reads as 13."""
    return int(math.floor(value + 0.5))

def temperature_description(avg_temp: float) -> str:
    if avg_temp > TEMP_WARM:
        return "warm"
    if avg_temp > TEMP_COMFORTABLE:
        return "comfortable"
    if avg_temp > TEMP_COOL:
        return "cool"
    return "chilly"

class ForecastSummaryService:
    """Template-based natural-language summaries of hourly wind forecasts.

    Phrases are drawn from fixed pools with the injected random source, so a
    seeded ``random.Random`` gives reproducible summaries.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_summary(
        self,
        periods: Sequence[ForecastPeriod],
        current_conditions: Optional[CurrentConditions] = None
    ) -> str:
        """Summarize the forecast, optionally relative to current wind."""
        if not periods:
            return NO_DATA_SUMMARY

        df = self._to_frame(periods)
        conditions = self.analyze_wind(df)
        comparison = self.compare_with_current(conditions, current_conditions)
        weather = self.dominant_weather(df)
        avg_temp = float(df["temperature"].mean())

        parts = [
            self._opening(conditions, comparison),
            self._wind_description(conditions),
            self._weather_context(weather, avg_temp),
            self._action_recommendation(conditions, weather),
        ]
        return " ".join(parts)

    def _to_frame(self, periods: Sequence[ForecastPeriod]) -> pd.DataFrame:
        speeds = [parse_wind_speed(p.wind_speed) for p in periods]
        return pd.DataFrame({
            "avg": [avg for avg, _ in speeds],
            "max": [peak for _, peak in speeds],
            "temperature": [p.temperature for p in periods],
            "forecast": [p.short_forecast.lower() for p in periods],
        })

    def analyze_wind(self, df: pd.DataFrame) -> WindCondition:
        high = df["avg"] > WIND_THRESHOLD_MODERATE
        # Each non-high period starts a new group; the group sums are run lengths
        longest_run = int(high.groupby((~high).cumsum()).sum().max())

        gusty_periods = int(((df["max"] - df["avg"]) > GUST_RANGE_THRESHOLD).sum())

        return WindCondition(
            avg_speed=float(df["avg"].mean()),
            max_speed=float(df["max"].max()),
            min_speed=float(df["avg"].min()),
            sustained_high_wind=longest_run >= MIN_CONSECUTIVE_PERIODS_SUSTAINED,
            gusty=gusty_periods > len(df) / 3,
        )

    def compare_with_current(
        self,
        conditions: WindCondition,
        current_conditions: Optional[CurrentConditions]
    ) -> Optional[ForecastComparison]:
        if current_conditions is None or current_conditions.wind_speed is None:
            return None

        current_speed = current_conditions.wind_speed
        difference = conditions.avg_speed - current_speed

        return ForecastComparison(
            is_current_stronger=difference < -SIGNIFICANT_DIFFERENCE,
            is_forecast_stronger=difference > SIGNIFICANT_DIFFERENCE,
            is_similar=abs(difference) <= SIGNIFICANT_DIFFERENCE,
            current_speed=current_speed,
            forecast_avg=conditions.avg_speed,
        )

    def dominant_weather(self, df: pd.DataFrame) -> WeatherCategory:
        forecasts = df["forecast"]

        if forecasts.str.contains("rain|shower").any():
            return WeatherCategory.RAINY
        if forecasts.str.contains("thunder|storm").any():
            return WeatherCategory.STORMY
        if forecasts.str.contains("snow").any():
            return WeatherCategory.SNOWY

        clear_count = int((forecasts.str.contains("sunny|clear") | (forecasts == "fair")).sum())
        cloudy_count = int(forecasts.str.contains("cloud|overcast").sum())

        if clear_count > len(forecasts) / 2:
            return WeatherCategory.SUNNY
        if cloudy_count > len(forecasts) / 2:
            return WeatherCategory.CLOUDY
        return WeatherCategory.MIXED

    def _pick(self, pool: List[str]) -> str:
        return self.rng.choice(pool)

    def _opening(self, conditions: WindCondition, comparison: Optional[ForecastComparison]) -> str:
        avg_speed = conditions.avg_speed
        sustained = conditions.sustained_high_wind

        # Already windier now than the forecast average: tone it down
        if comparison and comparison.is_current_stronger:
            if avg_speed > WIND_THRESHOLD_HIGH:
                return self._pick(EASING_STRONG)
            if avg_speed > WIND_THRESHOLD_MODERATE:
                return self._pick(EASING_MODERATE)
            return self._pick(EASING_LIGHT)

        if comparison and comparison.is_similar and sustained:
            if avg_speed > WIND_THRESHOLD_HIGH:
                return self._pick(STEADY_STRONG)
            return self._pick(STEADY)

        if sustained and avg_speed > WIND_THRESHOLD_EPIC:
            return self._pick(EPIC)
        if sustained and avg_speed > WIND_THRESHOLD_HIGH:
            return self._pick(SUSTAINED_HIGH)
        if sustained and avg_speed > WIND_THRESHOLD_MODERATE:
            return self._pick(SUSTAINED_MODERATE)
        if avg_speed > WIND_THRESHOLD_MODERATE:
            return self._pick(PUFFS)
        return self._pick(LIGHT)

    def _wind_description(self, conditions: WindCondition) -> str:
        avg_speed = conditions.avg_speed

        wind_verb = "drifting"
        if avg_speed > WIND_THRESHOLD_EPIC:
            wind_verb = "howling"
        elif avg_speed > WIND_THRESHOLD_HIGH:
            wind_verb = "cranking"
        elif avg_speed > WIND_THRESHOLD_LOW:
            wind_verb = "blowing"

        gust_desc = " with some gnarly gusts" if conditions.gusty else ""

        if conditions.max_speed - conditions.min_speed > WIND_SPEED_VARIANCE_THRESHOLD:
            return (
                f"Wind {wind_verb} {_round(conditions.min_speed)}-{_round(conditions.max_speed)}mph"
                f"{gust_desc}."
            )
        return f"Wind {wind_verb} around {_round(avg_speed)}mph{gust_desc}."

    def _weather_context(self, weather: WeatherCategory, avg_temp: float) -> str:
        temp = temperature_description(avg_temp)

        contexts = {
            WeatherCategory.RAINY: [
                "Watch for rain showers.",
                "Bring your rain gear!",
                "Expect some wet conditions.",
            ],
            WeatherCategory.STORMY: [
                "Thunderstorms possible - stay safe!",
                "Storms in the forecast.",
                "Weather looking intense.",
            ],
            WeatherCategory.SUNNY: [
                f"{temp} and sunny!",
                "Beautiful clear skies!",
                f"Perfect {temp} weather!",
            ],
            WeatherCategory.CLOUDY: [
                f"{temp} with clouds.",
                f"Overcast but {temp}.",
                f"Gray skies, {temp} temps.",
            ],
            WeatherCategory.MIXED: [
                f"{temp} with varied conditions.",
                f"Mixed weather, {temp} overall.",
            ],
        }
        return self._pick(contexts.get(weather, contexts[WeatherCategory.MIXED]))

    def _action_recommendation(self, conditions: WindCondition, weather: WeatherCategory) -> str:
        if weather == WeatherCategory.STORMY:
            return STORM_WARNING

        if conditions.sustained_high_wind and conditions.avg_speed > WIND_THRESHOLD_HIGH:
            return self._pick(ACTION_SEND_IT)
        if conditions.avg_speed > WIND_THRESHOLD_MODERATE:
            return self._pick(ACTION_FUN)
        return self._pick(ACTION_CRUISE)
