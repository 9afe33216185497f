import argparse
import logging
import sys
from pathlib import Path

from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.api.auth_utils import create_identity_token
from tierpass.app_shell.config import Settings, validate_ops_rules
from tierpass.domain.errors import TierPassError
from tierpass.rules.loader import load_rules
from tierpass.services.platform import TierPassService, create_service

logger = logging.getLogger("cli")


def get_service(settings: Settings) -> TierPassService:
    if not settings.rules_path.exists():
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)

    rules = load_rules(Path(settings.rules_path))
    validate_ops_rules(rules, settings.data_dir)
    return create_service(SQLiteStore(settings.db_path), rules)


def handle_init(service: TierPassService, args: argparse.Namespace) -> None:
    state = service.get_platform_state().state
    print(f"Platform ready: administrator={state.administrator} unit_price={state.unit_price}")


def handle_token(service: TierPassService, args: argparse.Namespace) -> None:
    print(create_identity_token(args.identity))


def handle_status(service: TierPassService, args: argparse.Namespace) -> None:
    status = service.get_subscription_status(args.identity)
    expires = status.expires_at.isoformat() if status.expires_at else "-"
    print(f"{args.identity}: active={status.effective_active} tier={status.tier} expires={expires}")
    print(f"earnings={service.get_earnings(args.identity)}")


def handle_state(service: TierPassService, args: argparse.Namespace) -> None:
    snapshot = service.get_platform_state()
    state = snapshot.state
    print(f"administrator:   {state.administrator}")
    print(f"unit_price:      {state.unit_price}")
    print(f"content_counter: {state.content_counter}")
    print(f"paused:          {state.paused}")
    print(f"custody_balance: {snapshot.custody_balance}")
    print(f"creators:        {', '.join(service.list_creators()) or '-'}")


def handle_events(service: TierPassService, args: argparse.Namespace) -> None:
    result = service.list_events(name=args.name, limit=args.limit)
    for event in result.events:
        print(f"#{event.seq} {event.created_at.isoformat()} {event.name} {event.payload}")
    print(f"({len(result.events)} of {result.total})")


def _administrator(service: TierPassService) -> str:
    return service.get_platform_state().state.administrator


def handle_add_creator(service: TierPassService, args: argparse.Namespace) -> None:
    service.add_content_creator(_administrator(service), args.identity)
    print(f"Approved creator {args.identity}")


def handle_remove_creator(service: TierPassService, args: argparse.Namespace) -> None:
    service.remove_content_creator(_administrator(service), args.identity)
    print(f"Revoked creator {args.identity}")


def handle_set_price(service: TierPassService, args: argparse.Namespace) -> None:
    state = service.update_subscription_price(_administrator(service), args.price)
    print(f"Unit price set to {state.unit_price}")


def handle_pause(service: TierPassService, args: argparse.Namespace) -> None:
    service.pause_platform(_administrator(service))
    print("Platform paused.")


def handle_unpause(service: TierPassService, args: argparse.Namespace) -> None:
    service.unpause_platform(_administrator(service))
    print("Platform unpaused.")


HANDLERS = {
    "init": handle_init,
    "token": handle_token,
    "status": handle_status,
    "state": handle_state,
    "events": handle_events,
    "add-creator": handle_add_creator,
    "remove-creator": handle_remove_creator,
    "set-price": handle_set_price,
    "pause": handle_pause,
    "unpause": handle_unpause,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TierPass CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the database and platform state")

    token_parser = subparsers.add_parser("token", help="Issue a bearer token for an identity")
    token_parser.add_argument("identity")

    status_parser = subparsers.add_parser("status", help="Show subscription and earnings")
    status_parser.add_argument("identity")

    subparsers.add_parser("state", help="Show platform state")

    events_parser = subparsers.add_parser("events", help="List notifications")
    events_parser.add_argument("--name", help="Only events with this name")
    events_parser.add_argument("--limit", type=int, default=50)

    add_parser = subparsers.add_parser("add-creator", help="Approve a content creator")
    add_parser.add_argument("identity")

    remove_parser = subparsers.add_parser("remove-creator", help="Revoke a content creator")
    remove_parser.add_argument("identity")

    price_parser = subparsers.add_parser("set-price", help="Set the subscription unit price")
    price_parser.add_argument("price", type=int)

    subparsers.add_parser("pause", help="Set the pause flag")
    subparsers.add_parser("unpause", help="Clear the pause flag")

    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    service = get_service(Settings())
    try:
        HANDLERS[args.command](service, args)
    except TierPassError as e:
        logger.error("%s: %s", e.code, e.message)
        sys.exit(2)
    finally:
        service.store.close()


if __name__ == "__main__":
    main()
