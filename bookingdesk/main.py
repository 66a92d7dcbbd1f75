import argparse
import logging

from icecream import ic

from bookingdesk.core.abstract import App
from bookingdesk.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bookingdesk - client/server")

    parser.add_argument(
        "--mode",
        "-m",
        choices=["client", "server"],
        default="client",
        help="Run mode: 'client' or 'server' (default: client)",
    )
    parser.add_argument(
        "--screen",
        "-s",
        choices=["admin", "provider", "users", "track"],
        default="admin",
        help="Client screen to open (default: admin)",
    )
    parser.add_argument("--booking-id", help="Booking to follow on the 'track' screen")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging and icecream output")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    ic.configureOutput(prefix="🍦 DEBUG | ")
    if not args.debug:
        ic.disable()
    configure_logging("DEBUG" if args.debug else settings.log_level)

    app: App | None = None
    if args.mode == "client":
        from bookingdesk.client.app import ClientApp
        from bookingdesk.client.screens import Screens

        if args.screen == "track" and not args.booking_id:
            build_parser().error("--booking-id is required with --screen track")

        app = ClientApp(settings, booking_id=args.booking_id)
        app.current_screen = Screens(args.screen)
    elif args.mode == "server":
        from bookingdesk.server.app import ServerApp

        app = ServerApp(settings)

    if app is not None:
        app.run()


if __name__ == "__main__":
    main()
