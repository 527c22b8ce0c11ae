"""Normalized 36-hour forecast models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastInterval:
    start_time: str
    end_time: str
    weather: str = ""
    rain: str = ""
    min_temp: str = ""
    max_temp: str = ""
    comfort: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "weather": self.weather,
            "rain": self.rain,
            "minTemp": self.min_temp,
            "maxTemp": self.max_temp,
            "comfort": self.comfort,
        }


@dataclass(frozen=True)
class NormalizedForecast:
    city: str
    update_time: str
    forecasts: tuple[ForecastInterval, ...]

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "updateTime": self.update_time,
            "forecasts": [f.to_dict() for f in self.forecasts],
        }
