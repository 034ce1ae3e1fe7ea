from __future__ import annotations

UNKNOWN_CONDITION = "Unknown"

WEATHER_CODE_LABELS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    95: "Thunderstorm",
}


def condition_label(code: int | None) -> str:
    if code is None:
        return UNKNOWN_CONDITION
    return WEATHER_CODE_LABELS.get(code, UNKNOWN_CONDITION)
