"""Console formatters and shared display helpers for weather records."""

from datetime import date, datetime

from tenki.models.forecast import WeatherCategory, WeatherRecord

# Indexed by datetime.weekday(): Monday == 0
WEEKDAY_NAMES_JA = ("月", "火", "水", "木", "金", "土", "日")

# Checked in order; the first marker contained in the text decides the category
CATEGORY_MARKERS: tuple[tuple[str, WeatherCategory], ...] = (
    ("晴", WeatherCategory.CLEAR),
    ("雨", WeatherCategory.RAIN),
    ("曇", WeatherCategory.CLOUDY),
    ("くもり", WeatherCategory.CLOUDY),
    ("雪", WeatherCategory.SNOW),
)

ICON_FILES: dict[WeatherCategory, str] = {
    WeatherCategory.CLEAR: "hare.png",
    WeatherCategory.RAIN: "ame.png",
    WeatherCategory.CLOUDY: "kumori.png",
    WeatherCategory.SNOW: "yuki.png",
}

# (WeatherRecord field, column header) for attributes that may be absent
OPTIONAL_COLUMNS: tuple[tuple[str, str], ...] = (
    ("wind", "風速"),
    ("wave", "波の高さ"),
    ("precipitation_probability", "降水確率"),
    ("reliability", "信頼度"),
)

COLUMN_SEPARATOR = "    "


def weekday_name(d: date | datetime) -> str:
    return WEEKDAY_NAMES_JA[d.weekday()]


def format_date_label(d: date | datetime) -> str:
    """Format as 2024/05/01（水）, independent of the host locale."""
    return f"{d.strftime('%Y/%m/%d')}（{weekday_name(d)}）"


def classify_weather(text: str) -> WeatherCategory:
    for marker, category in CATEGORY_MARKERS:
        if marker in text:
            return category
    return WeatherCategory.UNKNOWN


def icon_file(text: str) -> str | None:
    return ICON_FILES.get(classify_weather(text))


def display_value(value: str | None, placeholder: str = "-") -> str:
    return placeholder if value is None else value


def populated_columns(records: list[WeatherRecord]) -> list[tuple[str, str]]:
    """Optional columns that have a value in at least one record."""
    return [
        (field, header)
        for field, header in OPTIONAL_COLUMNS
        if any(getattr(r, field) is not None for r in records)
    ]


def format_console_rows(
    records: list[WeatherRecord], placeholder: str = "-"
) -> list[str]:
    """Header line plus one line per record."""
    columns = populated_columns(records)
    header = ["日付", "天気"] + [h for _, h in columns]
    lines = [COLUMN_SEPARATOR.join(header)]
    for r in records:
        fields = [format_date_label(r.timestamp), r.weather_text]
        fields += [display_value(getattr(r, f), placeholder) for f, _ in columns]
        lines.append(COLUMN_SEPARATOR.join(fields))
    return lines


def format_console_text(
    records: list[WeatherRecord], placeholder: str = "-"
) -> str:
    return "\n".join(format_console_rows(records, placeholder))
