from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OneCallModel(BaseModel):
    """
    Base for every One Call payload model.

    - Unknown upstream fields are ignored.
    - Types are strict: a string where a number is expected is rejected
      (an int is still accepted for a float field).
    """

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)


class WeatherCondition(OneCallModel):
    id: int = Field(..., description="Weather condition id")
    main: str = Field(..., description="Group of weather parameters (Rain, Snow, Clear...)")
    description: str = Field(..., description="Condition within the group")
    icon: str = Field(..., description="Weather icon id")


class Precipitation(OneCallModel):
    """
    Precipitation volume for the last hour (mm), as reported in current
    and hourly records.
    """

    one_hour: float = Field(..., alias="1h")


class CurrentConditions(OneCallModel):
    """
    Current weather record (`current` section).
    """

    dt: int
    sunrise: int
    sunset: int
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    dew_point: float
    uvi: float
    clouds: int
    visibility: int
    wind_speed: float
    wind_deg: int
    weather: List[WeatherCondition]

    wind_gust: Optional[float] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None


class HourlyForecastEntry(OneCallModel):
    """
    One entry of the `hourly` section (48 hours).
    """

    dt: int
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    dew_point: float
    uvi: float
    clouds: int
    visibility: int
    wind_speed: float
    wind_deg: int
    weather: List[WeatherCondition]
    pop: float = Field(..., description="Probability of precipitation (0-1)")

    wind_gust: Optional[float] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None


class DailyTemperature(OneCallModel):
    day: float
    min: float
    max: float
    night: float
    eve: float
    morn: float


class DailyFeelsLike(OneCallModel):
    day: float
    night: float
    eve: float
    morn: float


class DailyForecastEntry(OneCallModel):
    """
    One entry of the `daily` section (8 days).

    `rain` and `snow` are daily accumulations in mm and are only present
    when precipitation is expected.
    """

    dt: int
    sunrise: int
    sunset: int
    moonrise: int
    moonset: int
    moon_phase: float = Field(..., description="0 and 1 new moon, 0.25 first quarter, 0.5 full moon, 0.75 last quarter")
    temp: DailyTemperature
    feels_like: DailyFeelsLike
    pressure: int
    humidity: int
    dew_point: float
    wind_speed: float
    wind_deg: int
    weather: List[WeatherCondition]
    clouds: int
    pop: float
    uvi: float

    wind_gust: Optional[float] = None
    rain: Optional[float] = None
    snow: Optional[float] = None
    summary: Optional[str] = None


class OneCallEnvelope(OneCallModel):
    lat: float
    lon: float
    timezone: str
    timezone_offset: int = Field(..., description="Shift in seconds from UTC")


class CurrentWeatherResponse(OneCallEnvelope):
    """
    Payload of `GET /weather`: envelope plus the current conditions.
    """

    current: CurrentConditions


class ForecastResponse(OneCallEnvelope):
    """
    Payload of `GET /weather/forecast`: hourly and daily sections.
    """

    hourly: List[HourlyForecastEntry]
    daily: List[DailyForecastEntry]


class DailyForecastResponse(OneCallEnvelope):
    """
    Payload of `GET /weather/daily`.
    """

    daily: List[DailyForecastEntry]
