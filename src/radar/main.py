import asyncio
import sys
from pathlib import Path

from core.containers.app_containers import AppContainer
from core.errors import ConfigurationError
from core.logging.logger import configure_logging, get_logger
from ingest.sources.trending.loader import load_trending_repos

logger = get_logger(__name__)


async def main(container: AppContainer | None = None) -> str:
    """
    1) config + credentials (fatal on error)
    2) load trending repositories
    3) analyze
    4) format + save report
    """
    container = container or AppContainer()
    settings = container.settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info("=" * 60)
    logger.info("🚀 Starting Personalized GitHub Radar")
    logger.info("=" * 60)
    logger.info(
        f"Configuration loaded: {len(settings.TARGET_LANGUAGES)} languages, "
        f"{len(settings.TOPIC_KEYWORDS)} keywords"
    )

    # credentials are resolved here, before any batch runs
    pipeline = container.pipeline()
    formatter = container.formatter()

    records = load_trending_repos(settings.RADAR_INPUT_PATH)
    result = await pipeline.run(records)

    stats = result.stats
    logger.info("=" * 60)
    logger.info("📊 Radar Run Summary")
    logger.info("=" * 60)
    logger.info(f"Input:       {stats.total_input:4d}")
    logger.info(f"Filtered:    {stats.total_filtered:4d}")
    logger.info(f"Analyzed:    {stats.total_analyzed:4d}")
    logger.info(f"Summarized:  {stats.total_summarized:4d}")
    if stats.omitted:
        logger.warning(f"Omitted:     {stats.omitted:4d}  ({stats.failed_batches} failed batches)")
    logger.info("=" * 60)

    report = formatter.format(result)
    report_path = Path(settings.RADAR_REPORT_PATH)
    report_path.write_text(report, encoding="utf-8")
    logger.info(f"📄 Report saved to: {report_path}")
    return report


def cli():
    try:
        asyncio.run(main())
    except ConfigurationError as e:
        logger.error(f"❌ Personalized Radar failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutdown complete")


if __name__ == "__main__":
    cli()
