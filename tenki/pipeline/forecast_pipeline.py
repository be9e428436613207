"""Forecast pipeline: fetch, normalize, then render to each requested sink."""

import logging
import time
from collections.abc import Callable

from tenki.config.loader import region_by_slug
from tenki.config.schema import AppConfig
from tenki.ingest.feed_normalizer import MalformedFeedError, normalize
from tenki.ingest.jma_client import JmaClient, TransportError, feed_url
from tenki.models.common import local_now
from tenki.models.forecast import SlotCap
from tenki.models.reporting import RunResult
from tenki.reporting.advisories import AdvisoryKind, build_advisory, format_advisory
from tenki.reporting.formatters import format_console_rows
from tenki.reporting.html_renderer import RenderIOError, write_html

logger = logging.getLogger(__name__)


class ForecastPipeline:
    def __init__(
        self,
        config: AppConfig,
        client: JmaClient | None = None,
        out: Callable[[str], None] = print,
    ):
        self.config = config
        self.client = client or JmaClient(
            user_agent=config.feed.user_agent,
            timeout=config.feed.timeout_seconds,
        )
        self.out = out

    def slot_limit(self, cap: SlotCap) -> int | None:
        if cap == SlotCap.WEEKLY:
            return self.config.render.weekly_slots
        if cap == SlotCap.SHORT:
            return self.config.render.short_range_slots
        return None

    def run(
        self,
        region_slug: str | None = None,
        cap: SlotCap = SlotCap.ALL,
        html_path: str | None = None,
        advisories: bool = False,
    ) -> RunResult:
        """Execute one fetch/normalize/render cycle.

        Core failures are reported as a single line and recorded on the
        result; nothing is raised to the caller.
        """
        start_time = time.monotonic()
        region = region_by_slug(self.config, region_slug)
        url = feed_url(region.area_code, self.config.feed.base_url)
        result = RunResult(region_slug=region.slug, url=url)
        render = self.config.render

        try:
            raw = self.client.fetch(url)
            result.records = normalize(raw, max_slots=self.slot_limit(cap))
        except (TransportError, MalformedFeedError) as e:
            logger.error("Forecast run failed for %s: %s", region.slug, e)
            self.out(f"エラーが発生しました: {e}")
            result.errors.append(str(e))
            result.duration_seconds = time.monotonic() - start_time
            return result

        logger.info("Normalized %d records for %s", len(result.records), region.slug)
        for line in format_console_rows(result.records, render.placeholder):
            self.out(line)

        if html_path is not None:
            short = result.records[: render.short_range_slots]
            heading = f"{region.name}の天気予報（直近{len(short)}件）"
            try:
                written = write_html(
                    short,
                    html_path,
                    heading=heading,
                    image_dir=render.image_dir,
                    placeholder=render.placeholder,
                )
                result.html_path = str(written)
                self.out(f"HTMLファイルを出力しました: {written}")
            except RenderIOError as e:
                logger.error("HTML output failed: %s", e)
                self.out(f"HTML出力エラー: {e}")
                result.errors.append(str(e))

        if advisories:
            self.print_advisories(region.name)

        result.duration_seconds = time.monotonic() - start_time
        return result

    def print_advisories(
        self, region_name: str, kinds: list[AdvisoryKind] | None = None
    ) -> None:
        today = local_now().date()
        for kind in kinds or list(AdvisoryKind):
            advisory = build_advisory(kind, today, self.config.render.advisory_days)
            self.out("")
            self.out(format_advisory(advisory, region_name))
