import base64
import hashlib
import hmac
import json
import logging

import requests

from textyess_sync.webhook import WebhookNotifier, build_url, sign_body

from conftest import FakePost, FakeResponse, make_config


SAMPLE_PAYLOAD = {"id": "100000001", "total": 59.99, "customer": {"firstName": "Zoë"}, "note": "a/b"}


def test_disabled_integration_sends_nothing(fake_post):
	notifier = WebhookNotifier(config=make_config(enabled=False), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert fake_post.calls == []


def test_signed_request_headers_and_body(fake_post):
	notifier = WebhookNotifier(config=make_config(), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "/create/") is True

	call = fake_post.calls[0]
	assert call["url"] == "https://gateway.example.com/webhooks/magento/orders/create/user-123"
	assert call["timeout"] == 5.0
	body = call["data"]
	assert "Zoë".encode("utf-8") in body
	assert b'"a/b"' in body
	assert json.loads(body.decode("utf-8")) == SAMPLE_PAYLOAD

	expected = base64.b64encode(hmac.new(b"s3cret", body, hashlib.sha256).digest()).decode()
	headers = call["headers"]
	assert headers["x-magento-hmac-sha256"] == expected
	assert headers["x-magento-topic"] == "orders/create"
	assert headers["x-textyess-user"] == "user-123"
	assert headers["Content-Type"] == "application/json"


def test_sign_body_known_value():
	body = b'{"id":"1"}'
	expected = base64.b64encode(hmac.new(b"key", body, hashlib.sha256).digest()).decode()
	assert sign_body(body, "key") == expected


def test_build_url_joins_with_single_slashes():
	assert build_url("https://h/base//", "/fulfilled/", "u1") == "https://h/base/fulfilled/u1"
	assert build_url("https://h/base", "", "u1") == "https://h/base/u1"


def test_override_url_is_used_verbatim(fake_post):
	notifier = WebhookNotifier(config=make_config(), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create", override_url="https://override.example/hook")
	assert fake_post.calls[0]["url"] == "https://override.example/hook"


def test_missing_settings_skip_send(fake_post, caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	notifier = WebhookNotifier(config=make_config(hmac_secret="", user_id=""), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert fake_post.calls == []
	warning = [r for r in caplog.records if r.levelno == logging.WARNING][0].getMessage()
	assert '"hmacSecret": "MISSING"' in warning
	assert '"userId": "MISSING"' in warning
	assert "s3cret" not in warning


def test_secret_is_never_logged(fake_post, caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	notifier = WebhookNotifier(config=make_config(user_id=""), http_post=fake_post)
	notifier.send("orders/create", SAMPLE_PAYLOAD, "create")
	assert '"hmacSecret": "SET"' in caplog.text
	assert "s3cret" not in caplog.text


def test_non_2xx_is_a_failure(caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	post = FakePost(response=FakeResponse(status_code=500, text="boom"))
	notifier = WebhookNotifier(config=make_config(), http_post=post)
	assert notifier.send("orders/fulfilled", SAMPLE_PAYLOAD, "fulfilled") is False
	errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
	assert len(errors) == 1
	assert '"status": 500' in errors[0]
	assert '"response": "boom"' in errors[0]
	assert "100000001" in errors[0]


def test_transport_error_is_a_failure(caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	post = FakePost(error=requests.ConnectionError("connection refused"))
	notifier = WebhookNotifier(config=make_config(), http_post=post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert '"status": null' in caplog.text
	assert "connection refused" in caplog.text


def test_unexpected_exception_is_contained(caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	post = FakePost(error=RuntimeError("unexpected"))
	notifier = WebhookNotifier(config=make_config(), http_post=post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert "Exception while sending webhook." in caplog.text


def test_unencodable_payload_is_not_sent(fake_post):
	notifier = WebhookNotifier(config=make_config(), http_post=fake_post)
	assert notifier.send("orders/create", {"total": float("nan")}, "create") is False
	assert fake_post.calls == []


def test_logs_are_gated_by_debug_flag(caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	post = FakePost(response=FakeResponse(status_code=404))
	notifier = WebhookNotifier(config=make_config(debug_logging=False), http_post=post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert caplog.records == []


def test_success_logs_info_when_debug_on(fake_post, caplog):
	caplog.set_level(logging.DEBUG, logger="textyess_sync")
	notifier = WebhookNotifier(config=make_config(), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is True
	assert "Webhook sent successfully." in caplog.text


def test_config_is_read_per_send(fake_post):
	configs = [make_config(enabled=False), make_config()]
	notifier = WebhookNotifier(config_reader=lambda: configs.pop(0), http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is True
	assert len(fake_post.calls) == 1


def test_failing_config_reader_returns_false(fake_post):
	def reader():
		raise RuntimeError("config store down")

	notifier = WebhookNotifier(config_reader=reader, http_post=fake_post)
	assert notifier.send("orders/create", SAMPLE_PAYLOAD, "create") is False
	assert fake_post.calls == []
