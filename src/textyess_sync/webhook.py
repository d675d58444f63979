"""Signed webhook delivery to the TextYess gateway.

Every request body is signed with HMAC-SHA256 using the shared secret and
sent as base64 in the ``x-magento-hmac-sha256`` header, the same scheme
Shopify uses for its own webhooks. Delivery is fire-and-forget: a failed
request is logged and dropped, ``send`` never raises.
"""

import base64
import hashlib
import hmac
import json
import logging
import traceback
from typing import Any, Callable, Dict, Optional

import requests

from .config import Config, get_config
from .utils import to_json


logger = logging.getLogger(__name__)

HEADER_SIGNATURE = "x-magento-hmac-sha256"
HEADER_TOPIC = "x-magento-topic"
HEADER_USER = "x-textyess-user"

TOPIC_ORDER_CREATED = "orders/create"
TOPIC_ORDER_FULFILLED = "orders/fulfilled"


def sign_body(body: bytes, secret: str) -> str:
	digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
	return base64.b64encode(digest).decode("ascii")


def build_url(base_url: str, action: str, user_id: str) -> str:
	segments = [base_url.rstrip("/"), action.strip("/"), user_id.strip("/")]
	return "/".join(s for s in segments if s)


def context_json(context: Dict[str, Any]) -> str:
	return json.dumps(context, ensure_ascii=False, default=str)


class WebhookNotifier:
	"""Send payloads to the TextYess webhook endpoint.

	Configuration is read on every ``send`` through ``config_reader`` (store
	scoped ``get_config`` by default) unless a fixed ``config`` snapshot is given.
	``http_post`` follows the ``requests.post`` call signature.
	"""

	def __init__(
		self,
		config: Optional[Config] = None,
		config_reader: Optional[Callable[[], Config]] = None,
		store: Optional[str] = None,
		http_post: Optional[Callable[..., Any]] = None,
	) -> None:
		self.config = config
		self.config_reader = config_reader
		self.store = store
		self.http_post = http_post or requests.post

	def read_config(self) -> Config:
		if self.config is not None:
			return self.config
		if self.config_reader is not None:
			return self.config_reader()
		return get_config(self.store)

	def send(self, topic: str, payload: Dict[str, Any], action: str = "", override_url: Optional[str] = None) -> bool:
		try:
			cfg = self.read_config()
		except Exception as e:
			logger.error("[TextYess] Could not read webhook configuration: %s", e)
			return False
		try:
			return self._send(cfg, topic, payload, action, override_url)
		except Exception as e:
			self._log_error(cfg, "Exception while sending webhook.", {
				"topic": topic,
				"exception": str(e),
				"trace": traceback.format_exc(),
			})
			return False

	def _send(self, cfg: Config, topic: str, payload: Dict[str, Any], action: str, override_url: Optional[str]) -> bool:
		if not cfg.enabled:
			self._log_info(cfg, "Integration disabled, skipping webhook send.", {"topic": topic})
			return False

		try:
			raw_body = to_json(payload)
		except (TypeError, ValueError) as e:
			self._log_error(cfg, "Failed to encode payload", {"topic": topic, "error": str(e)})
			return False

		base_url = cfg.webhook_url_base
		secret = cfg.hmac_secret
		user_id = cfg.user_id
		if not base_url or not secret or not user_id:
			self._log_warning(cfg, "Missing webhook config values, skipping send.", {
				"baseUrl": base_url or "MISSING",
				"hmacSecret": "SET" if secret else "MISSING",
				"userId": user_id or "MISSING",
			})
			return False

		url = override_url or build_url(base_url, action, user_id)
		body = raw_body.encode("utf-8")
		headers = {
			"Content-Type": "application/json",
			HEADER_SIGNATURE: sign_body(body, secret),
			HEADER_TOPIC: topic,
			HEADER_USER: user_id,
		}

		status: Optional[int] = None
		response_body: Optional[str] = None
		transport_error: Optional[str] = None
		try:
			response = self.http_post(url, data=body, headers=headers, timeout=cfg.timeout)
			status = response.status_code
			response_body = response.text
		except requests.RequestException as e:
			transport_error = str(e) or e.__class__.__name__

		if status is not None and 200 <= status < 300:
			self._log_info(cfg, "Webhook sent successfully.", {
				"topic": topic,
				"url": url,
				"status": status,
				"response": response_body,
			})
			return True

		self._log_error(cfg, "Webhook failed.", {
			"topic": topic,
			"url": url,
			"status": status,
			"response": response_body,
			"payload": raw_body,
			"transportError": transport_error,
		})
		return False

	# logs are only written when debug logging is switched on

	def _log_info(self, cfg: Config, message: str, context: Dict[str, Any]) -> None:
		if cfg.debug_logging:
			logger.info("[TextYess] %s %s", message, context_json(context))

	def _log_warning(self, cfg: Config, message: str, context: Dict[str, Any]) -> None:
		if cfg.debug_logging:
			logger.warning("[TextYess] %s %s", message, context_json(context))

	def _log_error(self, cfg: Config, message: str, context: Dict[str, Any]) -> None:
		if cfg.debug_logging:
			logger.error("[TextYess] %s %s", message, context_json(context))
