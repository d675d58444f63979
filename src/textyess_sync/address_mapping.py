import logging
from typing import Any, Callable, Dict, Optional

import pycountry

from .models import Address
from .utils import to_str


logger = logging.getLogger(__name__)

CountryNameLookup = Callable[[str], Optional[str]]

ADDRESS_FIELDS = [
	"firstName",
	"lastName",
	"company",
	"address1",
	"address2",
	"city",
	"province",
	"provinceCode",
	"country",
	"countryCode",
	"zip",
	"phone",
]


def lookup_country_name(code: str) -> Optional[str]:
	"""ISO 3166 display name for a two letter country code."""
	country = pycountry.countries.get(alpha_2=code.upper())
	return country.name if country else None


def resolve_country_name(address: Address, lookup: Optional[CountryNameLookup] = None) -> str:
	"""Display name for the address country, else the raw code, else ""."""
	code = to_str(address.country_id)
	if address.country_name:
		return address.country_name
	if lookup is not None and code:
		try:
			name = lookup(code)
		except Exception as e:
			logger.debug("[TextYess] Country lookup failed for %s: %s", code, e)
			name = None
		if name:
			return str(name)
	return code


def map_address(address: Optional[Address], country_name_lookup: Optional[CountryNameLookup] = None) -> Dict[str, Any]:
	if address is None:
		return {}
	street = address.street or []
	return {
		"firstName": to_str(address.firstname),
		"lastName": to_str(address.lastname),
		"company": to_str(address.company),
		"address1": to_str(street[0]) if len(street) > 0 else "",
		"address2": to_str(street[1]) if len(street) > 1 else "",
		"city": to_str(address.city),
		"province": to_str(address.region),
		"provinceCode": to_str(address.region_code),
		"country": resolve_country_name(address, country_name_lookup),
		"countryCode": to_str(address.country_id),
		"zip": to_str(address.postcode),
		"phone": to_str(address.telephone),
	}
