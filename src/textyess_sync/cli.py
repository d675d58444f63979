import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import ConfigValidationError, get_config, load_env_file, validate_config
from .address_mapping import lookup_country_name
from .handlers import on_order_placed, on_shipment_created
from .models import Order, Shipment
from .payload import build, build_fulfillment
from .utils import to_json
from .webhook import WebhookNotifier


LOG_FILE_NAME = "textyess_sync.log"


def _log_level(verbose: bool, debug_logging: bool) -> int:
	return logging.DEBUG if verbose or debug_logging else logging.INFO


def _configure_logging(log_dir: Optional[str], level: int) -> None:
	handlers: list = [logging.StreamHandler(sys.stderr)]
	if log_dir:
		path = Path(log_dir)
		path.mkdir(parents=True, exist_ok=True)
		handlers.append(logging.FileHandler(path / LOG_FILE_NAME, encoding="utf-8"))
	logging.basicConfig(
		level=level,
		format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
		handlers=handlers,
	)


def _load_json(path: str) -> Dict[str, Any]:
	with open(path, "r", encoding="utf-8") as f:
		data = json.load(f)
	if not isinstance(data, dict):
		raise ValueError(f"{path}: expected a JSON object")
	return data


def _load_order(path: str) -> Order:
	return Order.from_dict(_load_json(path))


def _load_shipment(path: str, order_path: Optional[str]) -> Shipment:
	shipment = Shipment.from_dict(_load_json(path))
	if order_path:
		shipment.order = _load_order(order_path)
	return shipment


def cmd_send_order(args: argparse.Namespace) -> int:
	try:
		order = _load_order(args.file)
	except (OSError, ValueError) as e:
		print(f"ERROR: Could not read order: {e}", file=sys.stderr)
		return 2
	notifier = WebhookNotifier(store=args.store)
	ok = on_order_placed(order, notifier=notifier, is_new=not args.existing)
	print(f"orders/create {order.increment_id}: {'sent' if ok else 'not sent'}")
	return 0 if ok else 1


def cmd_send_shipment(args: argparse.Namespace) -> int:
	try:
		shipment = _load_shipment(args.file, args.order)
	except (OSError, ValueError) as e:
		print(f"ERROR: Could not read shipment: {e}", file=sys.stderr)
		return 2
	if shipment.order is None:
		print("ERROR: Shipment has no embedded order, pass --order", file=sys.stderr)
		return 2
	notifier = WebhookNotifier(store=args.store)
	ok = on_shipment_created(shipment, notifier=notifier)
	print(f"orders/fulfilled {shipment.increment_id}: {'sent' if ok else 'not sent'}")
	return 0 if ok else 1


def cmd_preview(args: argparse.Namespace) -> int:
	try:
		order = _load_order(args.file)
		shipment = _load_shipment(args.shipment, None) if args.shipment else None
	except (OSError, ValueError) as e:
		print(f"ERROR: Could not read input: {e}", file=sys.stderr)
		return 2
	extra = {"fulfillments": [build_fulfillment(shipment)]} if shipment else None
	print(to_json(build(order, extra, lookup_country_name)))
	return 0


def cmd_validate_config(args: argparse.Namespace) -> int:
	cfg = get_config(args.store)
	try:
		validate_config(cfg)
	except ConfigValidationError as e:
		print(f"ERROR: {e}", file=sys.stderr)
		return 2
	state = "enabled" if cfg.enabled else "disabled"
	print(f"Configuration OK ({state}), webhook base {cfg.webhook_url_base}")
	return 0


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="textyess-sync", description="Push Magento orders and shipments to TextYess signed webhooks")
	p.add_argument("--env-file", help="Path to .env file to load", default=None)
	p.add_argument("--store", help="Store code used to pick store scoped settings", default=None)
	p.add_argument("--verbose", action="store_true")
	sub = p.add_subparsers(dest="cmd", required=True)

	po = sub.add_parser("send-order", help="Send the orders/create webhook for an order JSON file")
	po.add_argument("file", help="Magento REST order JSON")
	po.add_argument("--existing", action="store_true", help="Treat the order as already existing (nothing is sent)")
	po.set_defaults(func=cmd_send_order)

	ps = sub.add_parser("send-shipment", help="Send the orders/fulfilled webhook for a shipment JSON file")
	ps.add_argument("file", help="Magento REST shipment JSON")
	ps.add_argument("--order", help="Order JSON, if the shipment does not embed its order", default=None)
	ps.set_defaults(func=cmd_send_shipment)

	pp = sub.add_parser("preview", help="Print the payload for an order without sending it")
	pp.add_argument("file", help="Magento REST order JSON")
	pp.add_argument("--shipment", help="Shipment JSON to merge as a fulfillment", default=None)
	pp.set_defaults(func=cmd_preview)

	pv = sub.add_parser("validate-config", help="Check the settings required to enable the integration")
	pv.set_defaults(func=cmd_validate_config)
	return p


def main(argv: Optional[list] = None) -> None:
	parser = build_parser()
	args = parser.parse_args(argv)
	load_env_file(args.env_file)
	cfg = get_config(args.store)
	_configure_logging(cfg.log_dir, _log_level(args.verbose, cfg.debug_logging))
	code = args.func(args)
	sys.exit(code)
