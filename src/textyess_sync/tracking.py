from typing import Dict, Iterable, List, Tuple
from urllib.parse import quote_plus

from .models import Track
from .utils import to_str


# checked in order, first substring match on the carrier code wins
CARRIER_URL_TEMPLATES: List[Tuple[str, str]] = [
	("dhl", "https://www.dhl.com/global-en/home/tracking/tracking-express.html?submit=1&tracking-id={number}"),
	("ups", "https://wwwapps.ups.com/WebTracking/track?track=yes&trackNums={number}"),
	("fedex", "https://www.fedex.com/fedextrack/?tracknumbers={number}"),
	("usps", "https://tools.usps.com/go/TrackConfirmAction?tLabels={number}"),
]


def infer_tracking_url(carrier_code: str, tracking_number: str) -> str:
	code = (carrier_code or "").lower()
	for needle, template in CARRIER_URL_TEMPLATES:
		if needle in code:
			return template.format(number=quote_plus(tracking_number))
	return ""


def resolve_tracks(tracks: Iterable[Track]) -> List[Dict[str, str]]:
	"""Return one {id, tracking_company, tracking_url} entry per track with a number.

	Tracks without a tracking number are dropped. A provider supplied URL wins
	over the carrier template.
	"""
	resolved: List[Dict[str, str]] = []
	for track in tracks:
		number = to_str(track.track_number).strip()
		if not number:
			continue
		carrier_code = to_str(track.carrier_code)
		url = to_str(track.url)
		if not url:
			url = infer_tracking_url(carrier_code, number)
		title = to_str(track.title).strip()
		resolved.append({
			"id": to_str(track.entity_id),
			"tracking_company": title or carrier_code.upper(),
			"tracking_url": url,
		})
	return resolved


def summarize_tracks(resolved: List[Dict[str, str]]) -> Tuple[str, str, List[str]]:
	"""(company, url) of the first track plus every non-empty url."""
	first = resolved[0] if resolved else {"tracking_company": "", "tracking_url": ""}
	urls = [t["tracking_url"] for t in resolved if t.get("tracking_url")]
	return first["tracking_company"], first["tracking_url"], urls
