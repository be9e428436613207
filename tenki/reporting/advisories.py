"""Static weekly advisories (UV, heatstroke, pressure, pollen).

These are fixed tables, not derived from the forecast feed. Levels and
advice cycle by day index over the requested span.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

from tenki.reporting.formatters import format_date_label


class AdvisoryKind(StrEnum):
    UV = "uv"
    HEATSTROKE = "heatstroke"
    PRESSURE = "pressure"
    POLLEN = "pollen"


@dataclass(frozen=True)
class AdvisoryTable:
    title: str
    levels: tuple[str, ...]
    advices: tuple[str, ...]
    source_url: str


@dataclass(frozen=True)
class AdvisoryDay:
    day: date
    level: str
    advice: str


@dataclass(frozen=True)
class Advisory:
    kind: AdvisoryKind
    title: str
    days: list[AdvisoryDay]
    source_url: str


ADVISORY_TABLES: dict[AdvisoryKind, AdvisoryTable] = {
    AdvisoryKind.UV: AdvisoryTable(
        title="紫外線情報",
        levels=("強い", "非常に強い", "中程度", "弱い", "強い", "非常に強い", "中程度"),
        advices=(
            "紫外線対策は必須、外では日かげに",
            "外出はできるだけ控え、長袖や帽子を着用しましょう",
            "日焼け止めを塗るなど対策をしましょう",
            "特別な対策は不要ですが、油断しないようにしましょう",
        ),
        source_url="https://tenki.jp/indexes/uv_index_ranking/6/",
    ),
    AdvisoryKind.HEATSTROKE: AdvisoryTable(
        title="熱中症情報",
        levels=("警戒", "厳重警戒", "注意", "警戒", "厳重警戒", "注意", "警戒"),
        advices=(
            "激しい運動や長時間の外出は控えましょう",
            "外出はできるだけ避け、涼しい室内で過ごしましょう",
            "こまめな水分補給と休憩を心がけましょう",
            "屋外での活動は短時間にしましょう",
        ),
        source_url="https://tenki.jp/heatstroke/",
    ),
    AdvisoryKind.PRESSURE: AdvisoryTable(
        title="気圧情報",
        levels=("やや高い", "普通", "やや低い", "高い", "低い", "普通", "やや高い"),
        advices=(
            "気圧の変化に注意しましょう",
            "体調管理に気をつけましょう",
            "気圧の低下に注意しましょう",
            "高気圧で体調が良くなるかもしれません",
            "低気圧で体調不良に注意しましょう",
        ),
        source_url="https://tenki.jp/pressure/6/",
    ),
    AdvisoryKind.POLLEN: AdvisoryTable(
        title="花粉情報",
        levels=("多い", "やや多い", "少ない", "非常に多い", "多い", "少ない", "やや多い"),
        advices=(
            "外出時はマスクやメガネを着用しましょう",
            "洗濯物の外干しは控えましょう",
            "帰宅時は衣服の花粉を払いましょう",
        ),
        source_url="https://tenki.jp/pollen/6/",
    ),
}


def build_advisory(kind: AdvisoryKind, start: date, days: int = 7) -> Advisory:
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    table = ADVISORY_TABLES[kind]
    entries = [
        AdvisoryDay(
            day=start + timedelta(days=i),
            level=table.levels[i % len(table.levels)],
            advice=table.advices[i % len(table.advices)],
        )
        for i in range(days)
    ]
    return Advisory(
        kind=kind, title=table.title, days=entries, source_url=table.source_url
    )


def format_advisory(advisory: Advisory, region_name: str) -> str:
    lines = [f"【{region_name}の{advisory.title}】"]
    for d in advisory.days:
        lines.append(f"{format_date_label(d.day)}: {d.level}（{d.advice}）")
    lines.append(f"詳しくは: {advisory.source_url}")
    return "\n".join(lines)
