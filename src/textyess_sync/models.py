from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def ensure_list(obj: Any) -> List[Any]:
	if obj is None:
		return []
	if isinstance(obj, list):
		return obj
	if isinstance(obj, tuple):
		return list(obj)
	return [obj]


def _opt_str(value: Any) -> Optional[str]:
	if value is None:
		return None
	return str(value)


def _opt_float(value: Any) -> Optional[float]:
	if value is None or value == "":
		return None
	try:
		return float(value)
	except (TypeError, ValueError):
		return None


@dataclass
class Address:
	firstname: Optional[str] = None
	lastname: Optional[str] = None
	company: Optional[str] = None
	street: List[str] = field(default_factory=list)
	city: Optional[str] = None
	region: Optional[str] = None
	region_code: Optional[str] = None
	country_id: Optional[str] = None
	country_name: Optional[str] = None
	postcode: Optional[str] = None
	telephone: Optional[str] = None

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "Address":
		street_raw = d.get("street")
		# Magento stores multi-line streets as a newline separated string
		if isinstance(street_raw, str):
			street = street_raw.split("\n")
		else:
			# blank lines keep their index so address1/address2 stay aligned
			street = ["" if s is None else str(s) for s in ensure_list(street_raw)]
		region = d.get("region")
		region_code = d.get("region_code")
		# customer address books nest region data
		if isinstance(region, dict):
			region_code = region_code or region.get("region_code")
			region = region.get("region")
		return Address(
			firstname=_opt_str(d.get("firstname")),
			lastname=_opt_str(d.get("lastname")),
			company=_opt_str(d.get("company")),
			street=street,
			city=_opt_str(d.get("city")),
			region=_opt_str(region),
			region_code=_opt_str(region_code),
			country_id=_opt_str(d.get("country_id")),
			country_name=_opt_str(d.get("country_name")),
			postcode=_opt_str(d.get("postcode")),
			telephone=_opt_str(d.get("telephone")),
		)


@dataclass
class OrderItem:
	item_id: Optional[str] = None
	product_id: Optional[str] = None
	parent_item_id: Optional[str] = None
	sku: Optional[str] = None
	name: Optional[str] = None
	qty_ordered: Optional[float] = None
	price: Optional[float] = None
	row_total: Optional[float] = None
	discount_amount: Optional[float] = None
	tax_amount: Optional[float] = None
	attribute_values: List[str] = field(default_factory=list)

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "OrderItem":
		options = d.get("product_options") or {}
		attributes = ensure_list(options.get("attributes_info") if isinstance(options, dict) else None)
		if not attributes:
			attributes = ensure_list(d.get("attributes_info"))
		values = [str(a.get("value")) for a in attributes if isinstance(a, dict) and a.get("value") is not None]
		parent = d.get("parent_item_id")
		if parent is None and isinstance(d.get("parent_item"), dict):
			parent = d["parent_item"].get("item_id")
		return OrderItem(
			item_id=_opt_str(d.get("item_id")),
			product_id=_opt_str(d.get("product_id")),
			parent_item_id=_opt_str(parent),
			sku=_opt_str(d.get("sku")),
			name=_opt_str(d.get("name")),
			qty_ordered=_opt_float(d.get("qty_ordered")),
			price=_opt_float(d.get("price")),
			row_total=_opt_float(d.get("row_total")),
			discount_amount=_opt_float(d.get("discount_amount")),
			tax_amount=_opt_float(d.get("tax_amount")),
			attribute_values=values,
		)


@dataclass
class Payment:
	method: Optional[str] = None
	title: Optional[str] = None

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "Payment":
		title = d.get("method_title") or d.get("title")
		if not title:
			# REST responses carry the method title as the first additional_information entry
			info = ensure_list(d.get("additional_information"))
			title = info[0] if info else None
		return Payment(method=_opt_str(d.get("method")), title=_opt_str(title))


@dataclass
class Order:
	entity_id: Optional[str] = None
	increment_id: Optional[str] = None
	state: Optional[str] = None
	created_at: Optional[str] = None
	updated_at: Optional[str] = None
	grand_total: Optional[float] = None
	subtotal: Optional[float] = None
	tax_amount: Optional[float] = None
	discount_amount: Optional[float] = None
	shipping_amount: Optional[float] = None
	currency: Optional[str] = None
	customer_id: Optional[str] = None
	customer_email: Optional[str] = None
	customer_firstname: Optional[str] = None
	customer_lastname: Optional[str] = None
	billing_address: Optional[Address] = None
	shipping_address: Optional[Address] = None
	items: List[OrderItem] = field(default_factory=list)
	shipping_description: Optional[str] = None
	shipping_method: Optional[str] = None
	payment: Optional[Payment] = None

	def visible_items(self) -> List[OrderItem]:
		# children of configurable/bundle products are hidden
		return [item for item in self.items if not item.parent_item_id]

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "Order":
		shipping_address = d.get("shipping_address")
		shipping_method = d.get("shipping_method")
		ext = d.get("extension_attributes") or {}
		assignments = ensure_list(ext.get("shipping_assignments"))
		if assignments and isinstance(assignments[0], dict):
			shipping = assignments[0].get("shipping") or {}
			shipping_address = shipping_address or shipping.get("address")
			shipping_method = shipping_method or shipping.get("method")
		billing = d.get("billing_address")
		payment = d.get("payment")
		return Order(
			entity_id=_opt_str(d.get("entity_id")),
			increment_id=_opt_str(d.get("increment_id")),
			state=_opt_str(d.get("state")),
			created_at=_opt_str(d.get("created_at")),
			updated_at=_opt_str(d.get("updated_at")),
			grand_total=_opt_float(d.get("grand_total")),
			subtotal=_opt_float(d.get("subtotal")),
			tax_amount=_opt_float(d.get("tax_amount")),
			discount_amount=_opt_float(d.get("discount_amount")),
			shipping_amount=_opt_float(d.get("shipping_amount")),
			currency=_opt_str(d.get("order_currency_code")),
			customer_id=_opt_str(d.get("customer_id")),
			customer_email=_opt_str(d.get("customer_email")),
			customer_firstname=_opt_str(d.get("customer_firstname")),
			customer_lastname=_opt_str(d.get("customer_lastname")),
			billing_address=Address.from_dict(billing) if isinstance(billing, dict) else None,
			shipping_address=Address.from_dict(shipping_address) if isinstance(shipping_address, dict) else None,
			items=[OrderItem.from_dict(i) for i in ensure_list(d.get("items")) if isinstance(i, dict)],
			shipping_description=_opt_str(d.get("shipping_description")),
			shipping_method=_opt_str(shipping_method),
			payment=Payment.from_dict(payment) if isinstance(payment, dict) else None,
		)


@dataclass
class Track:
	entity_id: Optional[str] = None
	carrier_code: Optional[str] = None
	track_number: Optional[str] = None
	title: Optional[str] = None
	url: Optional[str] = None

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "Track":
		return Track(
			entity_id=_opt_str(d.get("entity_id")),
			carrier_code=_opt_str(d.get("carrier_code")),
			track_number=_opt_str(d.get("track_number")),
			title=_opt_str(d.get("title")),
			url=_opt_str(d.get("url")),
		)


@dataclass
class Shipment:
	entity_id: Optional[str] = None
	increment_id: Optional[str] = None
	order_id: Optional[str] = None
	tracks: List[Track] = field(default_factory=list)
	order: Optional[Order] = None

	@staticmethod
	def from_dict(d: Dict[str, Any]) -> "Shipment":
		order = d.get("order")
		return Shipment(
			entity_id=_opt_str(d.get("entity_id")),
			increment_id=_opt_str(d.get("increment_id")),
			order_id=_opt_str(d.get("order_id")),
			tracks=[Track.from_dict(t) for t in ensure_list(d.get("tracks")) if isinstance(t, dict)],
			order=Order.from_dict(order) if isinstance(order, dict) else None,
		)
