"""Flatten the element-oriented CWA payload into per-interval records."""

from cwaproxy.models.errors import LocationNotFound, MalformedPayload
from cwaproxy.models.forecast import ForecastInterval, NormalizedForecast

# elementName -> (ForecastInterval field, unit suffix)
ELEMENT_FIELDS: dict[str, tuple[str, str]] = {
    "Wx": ("weather", ""),  # weather phenomenon
    "PoP": ("rain", "%"),  # probability of precipitation
    "MinT": ("min_temp", "°C"),
    "MaxT": ("max_temp", "°C"),
    "CI": ("comfort", ""),  # comfort index
}


def normalize(raw: dict) -> NormalizedForecast:
    """Build a NormalizedForecast from a raw F-C0032-001 response.

    Raises LocationNotFound when the location list is empty and
    MalformedPayload when the payload does not have the expected shape.
    Elements outside ELEMENT_FIELDS are ignored.
    """
    records = raw.get("records") if isinstance(raw, dict) else None
    if not isinstance(records, dict):
        raise MalformedPayload("Upstream payload has no records")

    locations = records.get("location")
    if not isinstance(locations, list):
        raise MalformedPayload("Upstream payload has no location list")
    if not locations:
        raise LocationNotFound()

    location = locations[0]
    elements = location.get("weatherElement") or []
    if not elements:
        raise MalformedPayload("Upstream location has no weather elements")

    time_axis = elements[0].get("time") or []
    forecasts = tuple(_build_interval(elements, time_axis, i) for i in range(len(time_axis)))

    return NormalizedForecast(
        city=location.get("locationName", ""),
        update_time=records.get("datasetDescription", ""),
        forecasts=forecasts,
    )


def _build_interval(elements: list[dict], time_axis: list[dict], index: int) -> ForecastInterval:
    slot = time_axis[index]
    values: dict[str, str] = {}
    for element in elements:
        mapping = ELEMENT_FIELDS.get(element.get("elementName"))
        if mapping is None:
            continue
        value = _parameter_name(element.get("time") or [], index)
        if value is None:
            continue
        field, suffix = mapping
        values[field] = f"{value}{suffix}"

    return ForecastInterval(
        start_time=slot.get("startTime", ""),
        end_time=slot.get("endTime", ""),
        **values,
    )


def _parameter_name(series: list[dict], index: int) -> str | None:
    if index >= len(series):
        return None
    parameter = series[index].get("parameter") or {}
    value = parameter.get("parameterName")
    return None if value is None else str(value)
