"""Pipeline — discovery through transform, write and section listings."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import PurePosixPath

from sitepipe.config.models import PublishConfig, SiteConfig
from sitepipe.content.metadata import Clock, extract_metadata
from sitepipe.content.models import ContentUnit, utcnow
from sitepipe.discovery.walker import discover
from sitepipe.errors import DiscoveryError, PatternError, SitePipeError, TransformError
from sitepipe.frontmatter import decode_front_matter
from sitepipe.interfaces.store import Store
from sitepipe.interfaces.transform import Transform
from sitepipe.output.paths import output_path
from sitepipe.permalink import PermalinkEngine
from sitepipe.pipeline.models import PublishReport, UnitError
from sitepipe.sections.aggregator import SectionAggregator

logger = logging.getLogger(__name__)


def strip_underscore(name: str) -> str:
    """Drop exactly one leading underscore (``_index`` -> ``index``)."""
    return name[1:] if name.startswith("_") else name


class Pipeline:
    """Publishes a source tree through a transform into a store.

    Content-level failures (decode, permalink, transform) drop the unit and
    are recorded in the report. Discovery and store failures propagate.
    """

    def __init__(
        self,
        config: PublishConfig,
        site: SiteConfig,
        transform: Transform,
        store: Store,
        engine: PermalinkEngine | None = None,
        now: Clock = utcnow,
    ) -> None:
        self.config = config
        self.transform = transform
        self.store = store
        self.engine = engine or PermalinkEngine()
        self.now = now
        self.ugly_urls = site.get_bool("uglyURLs")
        self.build_drafts = site.get_bool("buildDrafts")
        self.permalinks = site.get_string_map("permalinks")

    # -- Public API ----------------------------------------------------------

    def run(self) -> PublishReport:
        """Synchronous entry point."""
        return asyncio.run(self.run_async())

    async def run_async(self) -> PublishReport:
        start = time.monotonic()
        report = PublishReport()

        units = await self._collect(report)
        units = await self._transform_all(units, report)
        written = self._write_all(units, report)

        if self.config.section_list:
            aggregator = SectionAggregator(self.store, self.config.ext, self.ugly_urls)
            sections = aggregator.publish(units, self.config.section_on_root, written)
            report.sections = len(sections)

        report.duration = time.monotonic() - start
        return report

    def pattern_for(self, section: str) -> str:
        """Permalink pattern registered for `section`, else the default."""
        return self.permalinks.get(section, self.config.default_permalink)

    def prepare(self, unit: ContentUnit) -> None:
        """Decode, extract metadata and derive the destination in place.

        Raises DecodeError or PatternError for content problems and
        DiscoveryError if the source cannot be read.
        """
        try:
            data = unit.source_path.read_bytes()
        except OSError as e:
            raise DiscoveryError(str(unit.source_path), e) from e

        front = decode_front_matter(data)
        meta = extract_metadata(front.data, self.now)
        meta.file_path = unit.base_name
        meta.subdir = "" if unit.is_root else unit.parent_section

        if unit.is_root:
            destination = strip_underscore(unit.base_name)
        else:
            pattern = self.pattern_for(unit.parent_section)
            destination = self.engine.expand(pattern, meta).rstrip("/")
            _check_destination(pattern, destination)

        meta.permalink = destination
        unit.destination = destination
        unit.metadata = meta
        unit.is_draft = meta.draft
        unit.raw_body = front.body

    # -- Stages --------------------------------------------------------------

    async def _collect(self, report: PublishReport) -> list[ContentUnit]:
        """Consume discovered units, keeping those that should be published."""
        queue: asyncio.Queue[ContentUnit | None] = asyncio.Queue(maxsize=self.config.queue_size)
        producer = asyncio.create_task(discover(self.config.source, queue))

        kept: list[ContentUnit] = []
        drained = False
        try:
            while (unit := await queue.get()) is not None:
                report.discovered += 1
                try:
                    self.prepare(unit)
                except SitePipeError as exc:
                    if exc.fatal:
                        raise
                    _record(report, unit, exc)
                    continue

                if unit.is_draft and not self.build_drafts:
                    logger.info("skipping draft %s (%d bytes)", unit.source_path, len(unit.raw_body))
                    report.drafts_skipped += 1
                    continue
                kept.append(unit)
            drained = True
        finally:
            if not drained:
                producer.cancel()

        # surfaces walk errors from the producer
        await producer
        return kept

    async def _transform_all(self, units: list[ContentUnit], report: PublishReport) -> list[ContentUnit]:
        """Run the transform over a bounded worker pool."""
        limit = asyncio.Semaphore(self.config.workers)

        async def _one(unit: ContentUnit) -> tuple[str, bytes | SitePipeError]:
            async with limit:
                try:
                    return str(unit.source_path), await asyncio.to_thread(self.transform.apply, unit.raw_body)
                except SitePipeError as exc:
                    if exc.fatal:
                        raise
                    return str(unit.source_path), exc
                except Exception as exc:
                    err = TransformError(type(self.transform).__name__, f"{type(exc).__name__}: {exc}")
                    err.__cause__ = exc
                    return str(unit.source_path), err

        results = dict(await asyncio.gather(*(_one(u) for u in units)))

        done: list[ContentUnit] = []
        for unit in units:
            outcome = results[str(unit.source_path)]
            if isinstance(outcome, SitePipeError):
                _record(report, unit, outcome)
                continue
            unit.transformed_body = outcome
            logger.info("processed %s (%d bytes)", unit.source_path, len(unit.raw_body))
            done.append(unit)
        return done

    def _write_all(self, units: list[ContentUnit], report: PublishReport) -> dict[PurePosixPath, bytes]:
        """Write every artifact; returns the bodies keyed by output path."""
        self.store.ensure_dir(".")
        written: dict[PurePosixPath, bytes] = {}
        for unit in units:
            path = output_path(unit.destination, self.config.ext, self.ugly_urls)
            if path in written:
                logger.warning("%s overwrites %s written earlier in this run", unit.source_path, path)
            self.store.ensure_dir(path.parent)
            self.store.write_file(path, unit.transformed_body)
            unit.output_path = path
            written[path] = unit.transformed_body
            report.written += 1
        return written


def _check_destination(pattern: str, destination: str) -> None:
    relative = destination.strip("/")
    if not relative:
        raise PatternError(pattern, "expands to an empty destination")
    if any(p in (".", "..") for p in relative.split("/")):
        raise PatternError(pattern, f"destination {destination!r} escapes the output root")


def _record(report: PublishReport, unit: ContentUnit, exc: SitePipeError) -> None:
    logger.warning("skipping %s: %s", unit.source_path, exc)
    report.errors.append(UnitError(file=str(unit.source_path), stage=exc.stage, error=str(exc)))
