import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv


DEFAULT_WEBHOOK_URL_BASE = "https://gateway.textyess.com/webhooks/magento/orders"
DEFAULT_TIMEOUT = 10.0
ENV_PREFIX = "TEXTYESS_"

TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigValidationError(ValueError):
	pass


@dataclass
class Config:
	enabled: bool
	webhook_url_base: str
	hmac_secret: str
	user_id: str
	debug_logging: bool
	# seconds before an outbound webhook call is abandoned
	timeout: float = DEFAULT_TIMEOUT
	log_dir: Optional[str] = None


def load_env_file(env_file: Optional[str]) -> None:
	if env_file:
		load_dotenv(dotenv_path=env_file, override=False)
	else:
		# auto-load .env if exists in CWD
		cwd_env = Path.cwd() / ".env"
		if cwd_env.exists():
			load_dotenv(dotenv_path=str(cwd_env), override=False)


def _env(name: str, store: Optional[str] = None) -> Optional[str]:
	"""Store scoped value (TEXTYESS_<NAME>__<STORE>) falling back to the default scope."""
	if store:
		scoped = os.getenv(f"{ENV_PREFIX}{name}__{store.upper()}")
		if scoped is not None:
			return scoped
	return os.getenv(f"{ENV_PREFIX}{name}")


def _flag(value: Optional[str]) -> bool:
	return (value or "").strip().lower() in TRUE_VALUES


def _timeout(value: Optional[str]) -> float:
	try:
		timeout = float(value) if value else DEFAULT_TIMEOUT
	except ValueError:
		return DEFAULT_TIMEOUT
	return timeout if timeout > 0 else DEFAULT_TIMEOUT


def get_config(store: Optional[str] = None) -> Config:
	return Config(
		enabled=_flag(_env("ENABLED", store)),
		webhook_url_base=(_env("WEBHOOK_URL_BASE", store) or "").strip() or DEFAULT_WEBHOOK_URL_BASE,
		hmac_secret=_env("HMAC_SECRET", store) or "",
		user_id=(_env("USER_ID", store) or "").strip(),
		debug_logging=_flag(_env("DEBUG", store)),
		timeout=_timeout(_env("TIMEOUT", store)),
		log_dir=_env("LOG_DIR", store) or None,
	)


def is_valid_url(value: str) -> bool:
	parsed = urlparse(value)
	return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_enable(enabled: bool, webhook_url_base: Optional[str], user_id: Optional[str], hmac_secret: Optional[str]) -> None:
	"""Reject turning the integration on while required settings are blank."""
	if not enabled:
		return
	base_url = (webhook_url_base or "").strip()
	missing: List[str] = []
	if not base_url:
		missing.append("Webhook Base URL")
	if not (user_id or "").strip():
		missing.append("User ID")
	if not (hmac_secret or "").strip():
		missing.append("HMAC Secret")
	if missing:
		raise ConfigValidationError("TextYess Integration cannot be enabled. Missing: " + ", ".join(missing))
	if not is_valid_url(base_url):
		raise ConfigValidationError("Webhook Base URL is not a valid URL.")


def validate_config(cfg: Config) -> None:
	validate_enable(cfg.enabled, cfg.webhook_url_base, cfg.user_id, cfg.hmac_secret)
