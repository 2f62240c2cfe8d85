import os
from typing import Optional

from pagewalk import config
from pagewalk.domain.fetch_config import FetchConfig
from pagewalk.domain.retry_policy import RetryPolicy
from pagewalk.exceptions import ConfigError


class FetchConfigParser:
    """Parse a YAML dict into a FetchConfig.

    Responsibility: schema/validation for YAML config files.
    It does NOT perform filesystem IO.
    """

    def parse(self, *, config_path: str, data: dict) -> Optional[FetchConfig]:
        # Only files with a search: { base_url: ... } section are fetch configs
        search = data.get("search")
        if not isinstance(search, dict) or not search.get("base_url"):
            return None

        name = data.get("name") or os.path.splitext(os.path.basename(config_path))[0]
        retry_policy = self._parse_retry(config_path, data.get("retry") or {})

        max_pages = data.get("max_pages")
        if max_pages is not None:
            max_pages = self._as_int(config_path, "max_pages", max_pages)

        try:
            return FetchConfig(
                name=name,
                base_url=search["base_url"],
                query_param=search.get("query_param", "q"),
                retry_policy=retry_policy,
                max_pages=max_pages,
            )
        except ValueError as e:
            raise ConfigError(config_path, str(e)) from e

    def _parse_retry(self, config_path: str, retry: dict) -> RetryPolicy:
        if not isinstance(retry, dict):
            raise ConfigError(config_path, "retry must be a mapping")
        backoff = retry.get("backoff") or {}
        if not isinstance(backoff, dict):
            raise ConfigError(config_path, "retry.backoff must be a mapping")

        # Unset keys fall back to the PAGEWALK_* environment defaults
        defaults = config.default_retry_policy()
        try:
            return RetryPolicy(
                max_attempts=self._as_int(config_path, "retry.max_attempts", retry.get("max_attempts", defaults.max_attempts)),
                initial_delay=self._as_float(config_path, "retry.backoff.initial_delay", backoff.get("initial_delay", defaults.initial_delay)),
                multiplier=self._as_float(config_path, "retry.backoff.multiplier", backoff.get("multiplier", defaults.multiplier)),
                max_delay=self._as_float(config_path, "retry.backoff.max_delay", backoff.get("max_delay", defaults.max_delay)),
                on_exhausted=retry.get("on_exhausted", defaults.on_exhausted),
            )
        except ValueError as e:
            raise ConfigError(config_path, str(e)) from e

    def _as_int(self, config_path: str, key: str, value) -> int:
        if isinstance(value, bool):
            raise ConfigError(config_path, f"{key} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(config_path, f"{key} must be an integer, got {value!r}") from e

    def _as_float(self, config_path: str, key: str, value) -> float:
        if isinstance(value, bool):
            raise ConfigError(config_path, f"{key} must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(config_path, f"{key} must be a number, got {value!r}") from e
