"""Run outcome model."""

from dataclasses import dataclass, field

from tenki.models.forecast import WeatherRecord


@dataclass
class RunResult:
    region_slug: str
    url: str
    records: list[WeatherRecord] = field(default_factory=list)
    html_path: str | None = None
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
