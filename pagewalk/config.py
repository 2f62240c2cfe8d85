import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	value = raw.strip().lower()
	if value in ("1", "true", "yes", "on"):
		return True
	if value in ("0", "false", "no", "off"):
		return False
	logging.warning("Invalid %s: %r", name, raw)
	return default


def get_choice_env(name: str, default: str, choices) -> str:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	value = raw.strip().lower()
	if value in choices:
		return value
	logging.warning("Invalid %s: %r", name, raw)
	return default


def user_agent() -> str:
	return get_str_env("USER_AGENT", "pagewalk/0.1")


def http_timeout_seconds() -> int:
	return get_int_env("HTTP_TIMEOUT", 10)


def max_attempts() -> int:
	return get_int_env("PAGEWALK_MAX_ATTEMPTS", 3)


def backoff_initial_seconds() -> float:
	return get_float_env("PAGEWALK_BACKOFF_INITIAL", 0.5)


def backoff_multiplier() -> float:
	return get_float_env("PAGEWALK_BACKOFF_MULTIPLIER", 2.0)


def backoff_max_seconds() -> float:
	return get_float_env("PAGEWALK_BACKOFF_MAX", 30.0)


def on_exhausted() -> str:
	return get_choice_env("PAGEWALK_ON_EXHAUSTED", "raise", ("raise", "stop"))


def max_pages() -> Optional[int]:
	return get_optional_int_env("PAGEWALK_MAX_PAGES")


def configs_dir() -> str:
	return get_str_env("PAGEWALK_CONFIGS_DIR", os.path.join(os.getcwd(), "configs"))


def default_retry_policy():
	"""Build a `RetryPolicy` from the PAGEWALK_* environment variables."""
	from pagewalk.domain.retry_policy import ExhaustionMode, RetryPolicy

	return RetryPolicy(
		max_attempts=max_attempts(),
		initial_delay=backoff_initial_seconds(),
		multiplier=backoff_multiplier(),
		max_delay=backoff_max_seconds(),
		on_exhausted=ExhaustionMode.parse(on_exhausted()),
	)
