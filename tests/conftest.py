import pytest

from textyess_sync.config import Config


def sample_order_dict():
	return {
		"entity_id": 42,
		"increment_id": "000000042",
		"state": "processing",
		"created_at": "2024-05-10 14:30:00",
		"updated_at": "2024-05-10 14:35:12",
		"grand_total": "59.99",
		"subtotal": "39.98",
		"tax_amount": "0.00",
		"discount_amount": "0.00",
		"shipping_amount": "20.01",
		"order_currency_code": "USD",
		"customer_id": None,
		"customer_email": "ada@example.com",
		"customer_firstname": None,
		"customer_lastname": None,
		"shipping_description": "Flat Rate - Fixed",
		"billing_address": {
			"firstname": "Ada",
			"lastname": "Lovelace",
			"street": ["12 Analytical Row", "Flat 3"],
			"city": "London",
			"region": "Greater London",
			"region_code": "LND",
			"country_id": "GB",
			"postcode": "NW1 6XE",
			"telephone": "+44 20 7946 0000",
		},
		"items": [
			{
				"item_id": 101,
				"product_id": 7,
				"sku": "ABC",
				"name": "Difference Engine Poster",
				"qty_ordered": "2.0000",
				"price": "19.99",
				"row_total": "39.98",
				"discount_amount": "0",
				"tax_amount": "0",
				"product_options": {
					"attributes_info": [
						{"label": "Size", "value": "A2"},
						{"label": "Finish", "value": "Matte"},
					],
				},
			},
			{
				"item_id": 102,
				"parent_item_id": 101,
				"product_id": 8,
				"sku": "ABC-A2",
				"name": "Difference Engine Poster A2",
				"qty_ordered": "2.0000",
				"price": "0",
			},
		],
		"payment": {
			"method": "checkmo",
			"additional_information": ["Check / Money order"],
		},
		"extension_attributes": {
			"shipping_assignments": [
				{
					"shipping": {
						"method": "flatrate_flatrate",
						"address": {
							"firstname": "Ada",
							"lastname": "Lovelace",
							"street": "12 Analytical Row",
							"city": "London",
							"country_id": "GB",
							"postcode": "NW1 6XE",
						},
					},
				},
			],
		},
	}


def sample_shipment_dict():
	return {
		"entity_id": 9,
		"increment_id": "000000009",
		"order_id": 42,
		"tracks": [
			{"entity_id": 1, "carrier_code": "dhl", "track_number": "123456789", "title": ""},
		],
	}


def make_config(**overrides):
	values = dict(
		enabled=True,
		webhook_url_base="https://gateway.example.com/webhooks/magento/orders/",
		hmac_secret="s3cret",
		user_id="user-123",
		debug_logging=True,
		timeout=5.0,
	)
	values.update(overrides)
	return Config(**values)


class FakeResponse:
	def __init__(self, status_code=200, text="ok"):
		self.status_code = status_code
		self.text = text


class FakePost:
	def __init__(self, response=None, error=None):
		self.response = response or FakeResponse()
		self.error = error
		self.calls = []

	def __call__(self, url, data=None, headers=None, timeout=None):
		self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
		if self.error is not None:
			raise self.error
		return self.response


@pytest.fixture
def order_dict():
	return sample_order_dict()


@pytest.fixture
def shipment_dict():
	return sample_shipment_dict()


@pytest.fixture
def fake_post():
	return FakePost()
