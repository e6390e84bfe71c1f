# ABOUTME: Pydantic BaseModels for forecast backend responses and reverse-geocoding results.
# ABOUTME: Defines the immutable Forecast tree, the place descriptor, and the Units enumeration.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Backend aggregates may be rounded to one decimal place
TEMPERATURE_TOLERANCE = 0.05


class Units(str, Enum):
    """Display unit system requested from the forecast backend."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    def toggled(self) -> "Units":
        return Units.IMPERIAL if self is Units.METRIC else Units.METRIC


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coordinates(_Frozen):
    latitude: float
    longitude: float


class PlaceDescriptor(_Frozen):
    """Human-facing name, country and region for a coordinate (``city_info`` on the wire)."""

    name: str
    country: str | None = None
    state: str | None = None
    lat: float
    lon: float


class GeocodeResult(_Frozen):
    """Outcome of a reverse-geocoding attempt: a place, or the reason there is none."""

    place: PlaceDescriptor | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.place is not None


class NominatimAddress(_Frozen):
    """Address breakdown of a Nominatim reverse lookup (``addressdetails=1``)."""

    city: str | None = None
    town: str | None = None
    village: str | None = None
    county: str | None = None
    state: str | None = None
    country: str | None = None
    country_code: str | None = None


class NominatimResponse(_Frozen):
    """The fields of a Nominatim reverse response the dashboard reads."""

    lat: float
    lon: float
    display_name: str | None = None
    address: NominatimAddress


class CityCoord(_Frozen):
    lat: float
    lon: float


class CityRecord(_Frozen):
    """City metadata passed through from the forecast backend."""

    id: int
    name: str
    coord: CityCoord
    country: str
    population: int
    timezone: int
    sunrise: int
    sunset: int


class MainReadings(_Frozen):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: float
    sea_level: float
    grnd_level: float
    humidity: float
    temp_kf: float


class WeatherCondition(_Frozen):
    id: int
    main: str
    description: str
    icon: str


class Clouds(_Frozen):
    all: int


class Wind(_Frozen):
    speed: float
    deg: float
    gust: float


class Rain(_Frozen):
    three_hours: float = Field(alias="3h")


class Sys(_Frozen):
    pod: str


class HourlyForecast(_Frozen):
    """One time-stamped forecast sample."""

    dt: int
    main: MainReadings
    weather: list[WeatherCondition] = Field(min_length=1)
    clouds: Clouds
    wind: Wind
    visibility: int
    pop: float = Field(ge=0, le=1)
    rain: Rain | None = None
    sys: Sys
    dt_txt: str

    @property
    def is_day(self) -> bool:
        return self.sys.pod == "d"


class DailyForecast(_Frozen):
    """Aggregate of the hourly samples belonging to one calendar date."""

    date: str
    day_of_week: str
    avg_temp: float
    min_temp: float
    max_temp: float
    weather_condition: str
    weather_description: str
    weather_icon: str
    hourly_forecasts: list[HourlyForecast] = []

    @model_validator(mode="after")
    def _check_samples(self) -> "DailyForecast":
        stamps = [h.dt for h in self.hourly_forecasts]
        if stamps != sorted(stamps):
            raise ValueError(f"hourly forecasts for {self.date} are not ordered by timestamp")
        for hour in self.hourly_forecasts:
            if not self.min_temp - TEMPERATURE_TOLERANCE <= hour.main.temp <= self.max_temp + TEMPERATURE_TOLERANCE:
                raise ValueError(
                    f"sample {hour.dt_txt} temperature {hour.main.temp} outside "
                    f"[{self.min_temp}, {self.max_temp}] for {self.date}"
                )
        return self


class Forecast(_Frozen):
    """Complete forecast for one location."""

    city: CityRecord
    daily_forecasts: list[DailyForecast] = []
    city_info: PlaceDescriptor

    def with_place(self, place: PlaceDescriptor) -> "Forecast":
        """Return a copy whose place name, country and state come from ``place``.

        Latitude and longitude stay as the backend returned them.
        """
        city_info = self.city_info.model_copy(
            update={"name": place.name, "country": place.country, "state": place.state}
        )
        return self.model_copy(update={"city_info": city_info})
