from dependency_injector import containers, providers

from core.config.settings import load_settings
from core.llm.openai_client import OpenAIClient
from ingest.sources.github.client import GitHubClient
from radar.enricher import ContentEnricher
from radar.formatter import RadarFormatter
from radar.pipeline import RadarPipeline
from radar.summarizer import Summarizer


class AppContainer(containers.DeclarativeContainer):

    settings = providers.Singleton(load_settings)

    github_client = providers.Singleton(
        GitHubClient,
        token=settings.provided.get_github_token.call(),
        max_retries=settings.provided.GITHUB_MAX_RETRIES,
    )

    llm_client = providers.Singleton(
        OpenAIClient,
        api_key=settings.provided.OPENAI_API_KEY,
        model=settings.provided.OPENAI_MODEL,
    )

    enricher = providers.Factory(
        ContentEnricher,
        client=github_client,
        readme_max_chars=settings.provided.README_MAX_CHARS,
    )

    summarizer = providers.Factory(
        Summarizer.from_settings,
        settings=settings,
        llm_factory=llm_client.provider,
    )

    pipeline = providers.Factory(
        RadarPipeline,
        enricher=enricher,
        summarizer=summarizer,
        target_languages=settings.provided.TARGET_LANGUAGES,
        keywords=settings.provided.TOPIC_KEYWORDS,
        batch_size=settings.provided.BATCH_SIZE,
        batch_delay=settings.provided.BATCH_DELAY_SECONDS,
        rate_limit_backoff=settings.provided.RATE_LIMIT_BACKOFF_SECONDS,
    )

    formatter = providers.Factory(
        RadarFormatter,
        target_languages=settings.provided.TARGET_LANGUAGES,
        keywords=settings.provided.TOPIC_KEYWORDS,
        min_relevance_score=settings.provided.MIN_RELEVANCE_SCORE,
    )
