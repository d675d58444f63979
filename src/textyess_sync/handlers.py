import logging
from typing import Optional

from .address_mapping import CountryNameLookup, lookup_country_name
from .models import Order, Shipment
from .payload import build, build_fulfillment
from .webhook import TOPIC_ORDER_CREATED, TOPIC_ORDER_FULFILLED, WebhookNotifier, context_json


logger = logging.getLogger(__name__)

ACTION_CREATE = "create"
ACTION_FULFILLED = "fulfilled"


def on_order_placed(
	order: Optional[Order],
	notifier: Optional[WebhookNotifier] = None,
	is_new: bool = True,
	country_name_lookup: Optional[CountryNameLookup] = lookup_country_name,
) -> bool:
	"""Send the orders/create webhook for a freshly placed order.

	Orders that already existed before this save (is_new=False) are ignored so
	an order is announced only once.
	"""
	if order is None or not order.entity_id:
		return False
	if not is_new:
		return False
	notifier = notifier or WebhookNotifier()
	try:
		payload = build(order, country_name_lookup=country_name_lookup)
		if notifier.read_config().debug_logging:
			logger.debug("[TextYess] Prepared order.created payload %s", context_json({"payload": payload}))
		return notifier.send(TOPIC_ORDER_CREATED, payload, ACTION_CREATE)
	except Exception:
		logger.exception("[TextYess] order.created webhook aborted for order %s", order.increment_id)
		return False


def on_shipment_created(
	shipment: Optional[Shipment],
	order: Optional[Order] = None,
	notifier: Optional[WebhookNotifier] = None,
	country_name_lookup: Optional[CountryNameLookup] = lookup_country_name,
) -> bool:
	if shipment is None:
		return False
	order = order or shipment.order
	if order is None:
		logger.warning("[TextYess] Shipment %s has no order, skipping order.fulfilled webhook", shipment.increment_id)
		return False
	notifier = notifier or WebhookNotifier()
	try:
		fulfillment = build_fulfillment(shipment)
		payload = build(order, {"fulfillments": [fulfillment]}, country_name_lookup)
		if notifier.read_config().debug_logging:
			logger.info("[TextYess] Prepared order.fulfilled payload %s", context_json({"payload": payload}))
		return notifier.send(TOPIC_ORDER_FULFILLED, payload, ACTION_FULFILLED)
	except Exception:
		logger.exception("[TextYess] order.fulfilled webhook aborted for shipment %s", shipment.increment_id)
		return False
