"""Default regions with their JMA forecast area codes."""

from tenki.config.schema import RegionConfig

DEFAULT_REGIONS: list[RegionConfig] = [
    RegionConfig(name="大阪", slug="osaka", area_code="270000"),
    RegionConfig(name="東京", slug="tokyo", area_code="130000"),
    RegionConfig(name="京都", slug="kyoto", area_code="260000"),
    RegionConfig(name="兵庫", slug="hyogo", area_code="280000"),
    RegionConfig(name="愛知", slug="aichi", area_code="230000"),
    RegionConfig(name="福岡", slug="fukuoka", area_code="400000"),
]
