from typing import Dict, Optional


DEFAULT_FINANCIAL_STATUS = "created"

# Magento order state -> TextYess financial status
FINANCIAL_STATUS_MAP: Dict[str, str] = {
	"new": "created",
	"pending_payment": "created",
	"processing": "paid",
	"complete": "paid",
	# closed is reported as refunded even for partial refunds
	"closed": "refunded",
	"canceled": "voided",
}


def map_financial_status(state: Optional[str]) -> str:
	if not state:
		return DEFAULT_FINANCIAL_STATUS
	return FINANCIAL_STATUS_MAP.get(state, DEFAULT_FINANCIAL_STATUS)
