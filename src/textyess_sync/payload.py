"""Build TextYess order payloads from Magento order and shipment records."""

from typing import Any, Dict, List, Mapping, Optional

from .address_mapping import CountryNameLookup, map_address
from .models import Order, OrderItem, Shipment
from .status_mapping import map_financial_status
from .tracking import resolve_tracks, summarize_tracks
from .utils import format_iso8601, to_float, to_int, to_str


SHIPMENT_STATUS_SHIPPED = "shipped"


def map_line_item(item: OrderItem) -> Dict[str, Any]:
	return {
		"id": to_str(item.item_id) or to_str(item.product_id),
		"productId": to_str(item.product_id),
		"sku": to_str(item.sku),
		"title": to_str(item.name),
		"variantTitle": " / ".join(item.attribute_values),
		"quantity": to_int(item.qty_ordered),
		"price": round(to_float(item.price), 2),
		"total": round(to_float(item.row_total), 2),
		"discount": to_float(item.discount_amount),
		"tax": to_float(item.tax_amount),
	}


def map_customer(order: Order) -> Dict[str, str]:
	billing = order.billing_address
	email = to_str(order.customer_email)
	first_name = order.customer_firstname or (billing.firstname if billing else None)
	last_name = order.customer_lastname or (billing.lastname if billing else None)
	return {
		# guests have no customer id
		"id": to_str(order.customer_id) or email,
		"email": email,
		"firstName": to_str(first_name),
		"lastName": to_str(last_name),
		"phone": to_str(billing.telephone) if billing else "",
	}


def map_shipping_lines(order: Order) -> List[Dict[str, Any]]:
	if not order.shipping_description:
		return []
	return [{
		"title": order.shipping_description,
		"price": to_float(order.shipping_amount),
		"code": to_str(order.shipping_method),
	}]


def map_payment_methods(order: Order) -> List[str]:
	if order.payment is None:
		return []
	return [to_str(order.payment.title or order.payment.method)]


def build(
	order: Order,
	extra: Optional[Mapping[str, Any]] = None,
	country_name_lookup: Optional[CountryNameLookup] = None,
) -> Dict[str, Any]:
	payload: Dict[str, Any] = {
		"id": to_str(order.increment_id),
		"createdAt": format_iso8601(order.created_at),
		"updatedAt": format_iso8601(order.updated_at),
		"total": to_float(order.grand_total),
		"currency": to_str(order.currency),
		"status": map_financial_status(order.state),
		"subtotal": to_float(order.subtotal),
		"totalTax": to_float(order.tax_amount),
		"totalDiscount": to_float(order.discount_amount),
		"totalShipping": to_float(order.shipping_amount),
		# Magento has no native discount code list or tags
		"discountCodes": [],
		"tags": [],
		"customer": map_customer(order),
		"billingAddress": map_address(order.billing_address, country_name_lookup),
		"shippingAddress": map_address(order.shipping_address, country_name_lookup),
		"lineItems": [map_line_item(item) for item in order.visible_items()],
		"shippingLines": map_shipping_lines(order),
		"paymentMethods": map_payment_methods(order),
		"fulfillments": [],
	}
	if extra:
		payload.update(extra)
	return payload


def build_fulfillment(shipment: Shipment) -> Dict[str, Any]:
	tracks = resolve_tracks(shipment.tracks)
	company, url, urls = summarize_tracks(tracks)
	return {
		"id": to_str(shipment.increment_id),
		"shipment_status": SHIPMENT_STATUS_SHIPPED,
		"tracking_company": company,
		"tracking_url": url,
		"tracking_urls": urls,
	}
