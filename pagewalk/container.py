"""Dependency injection container for pagewalk."""
from dependency_injector import containers, providers
import requests

from pagewalk import config as env
from pagewalk.domain.retry_policy import RetryPolicy
from pagewalk.services.fetch_config_store import FetchConfigStore
from pagewalk.services.fetcher import SearchPageFetcher
from pagewalk.services.http_service import HttpService
from pagewalk.services.paged_fetcher import PagedFetcher
from pagewalk.services.paged_fetcher_factory import PagedFetcherFactory
from pagewalk.services.retry_runner import RetryRunner


# Environment variables used by the container (read via `pagewalk.config` helpers).
#
# USER_AGENT (str, default: "pagewalk/0.1")
#   User-Agent header for outbound search requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for each outbound HTTP request (one attempt).
#
# PAGEWALK_MAX_ATTEMPTS (int, default: 3)
#   Attempts per page, the first one included. 1 disables retries.
#
# PAGEWALK_BACKOFF_INITIAL / PAGEWALK_BACKOFF_MULTIPLIER / PAGEWALK_BACKOFF_MAX
#   (float seconds / float / float seconds, defaults: 0.5 / 2.0 / 30)
#   Delay before retry n is min(MAX, INITIAL * MULTIPLIER ** (n - 1)).
#
# PAGEWALK_ON_EXHAUSTED (str, default: "raise")
#   "raise" fails the stream with RetriesExhaustedError; "stop" ends it quietly.
#
# PAGEWALK_MAX_PAGES (int | optional)
#   Upper bound on pages read per stream. Unset means no limit.
#
# PAGEWALK_CONFIGS_DIR (str, default: ./configs)
#   Directory holding YAML fetch configs.
ENV = {
    "USER_AGENT": env.user_agent(),
    "HTTP_TIMEOUT": env.http_timeout_seconds(),
    "PAGEWALK_MAX_ATTEMPTS": env.max_attempts(),
    "PAGEWALK_BACKOFF_INITIAL": env.backoff_initial_seconds(),
    "PAGEWALK_BACKOFF_MULTIPLIER": env.backoff_multiplier(),
    "PAGEWALK_BACKOFF_MAX": env.backoff_max_seconds(),
    "PAGEWALK_ON_EXHAUSTED": env.on_exhausted(),
    "PAGEWALK_MAX_PAGES": env.max_pages(),
    "PAGEWALK_CONFIGS_DIR": env.configs_dir(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for pagewalk."""

    # Configuration
    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int)
    )

    retry_policy = providers.Singleton(
        RetryPolicy,
        max_attempts=config.PAGEWALK_MAX_ATTEMPTS.as_(int),
        initial_delay=config.PAGEWALK_BACKOFF_INITIAL.as_(float),
        multiplier=config.PAGEWALK_BACKOFF_MULTIPLIER.as_(float),
        max_delay=config.PAGEWALK_BACKOFF_MAX.as_(float),
        on_exhausted=config.PAGEWALK_ON_EXHAUSTED,
    )

    retry_runner = providers.Factory(
        RetryRunner,
        policy=retry_policy,
    )

    # Callers supply base_url (and optionally query_param)
    search_fetcher = providers.Factory(
        SearchPageFetcher,
        http_service=http_service,
    )

    # Callers supply query and page_source
    paged_fetcher = providers.Factory(
        PagedFetcher,
        retry_runner=retry_runner,
        max_pages=config.PAGEWALK_MAX_PAGES,
    )

    config_store = providers.Singleton(
        FetchConfigStore,
        configs_dir=config.PAGEWALK_CONFIGS_DIR,
    )

    paged_fetcher_factory = providers.Singleton(
        PagedFetcherFactory,
        http_service=http_service,
        config_store=config_store,
    )
