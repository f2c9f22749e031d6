# src/fxconvert/app.py
"""
Application Entry Point - Command-Line Front End

This module serves as the composition root for FXConvert. It wires the
settings, provider, store, connectivity monitor and converter together and
exposes them through the ``fxconvert`` command.

Commands:
    fxconvert convert AMOUNT [--from CODE] [--to CODE] [--refresh]
    fxconvert swap
    fxconvert refresh
    fxconvert status
    fxconvert currencies
    fxconvert watch

Exit codes: 0 success, 1 no usable rates (ERROR state), 2 bad input or configuration.

Files that USE this module:
- fxconvert.__main__ (python -m fxconvert)
- pyproject.toml console script (fxconvert)

Files that this module USES:
- fxconvert.shared.logging_conf (setup_logging for logging configuration)
- fxconvert.config (settings for configuration management)
- fxconvert.adapters.* (providers, persistence, connectivity, formatting)
- fxconvert.application.* (RatesFetcher, CurrencyConverter)
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import List, Optional, Tuple

from fxconvert import __version__
from fxconvert.adapters.connectivity import ConnectivityMonitor, ReachabilityProbe
from fxconvert.adapters.formatting import (
    format_conversion,
    format_snapshot_summary,
    format_status,
)
from fxconvert.adapters.persistence import RateStore
from fxconvert.adapters.providers import ProviderKind, build_provider
from fxconvert.application import ConverterEvent, CurrencyConverter, RatesFetcher
from fxconvert.config import Settings, load_settings
from fxconvert.domain import ConfigurationError, Currency, InvalidAmountError, InvalidCurrencyError
from fxconvert.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RATES = 1
EXIT_USAGE = 2


def build_converter(settings: Settings, offline: bool = False) -> Tuple[CurrencyConverter, Optional[ReachabilityProbe]]:
    """
    Wire all services for one converter instance.

    Args:
        settings: Loaded application settings
        offline: Start disconnected and skip the reachability probe

    Returns:
        (converter, probe) - probe is None when offline
    """
    providers = {kind: build_provider(settings, kind) for kind in ProviderKind}
    fetcher = RatesFetcher(providers, default=ProviderKind(settings.rates_provider))
    store = RateStore(settings.store_file, expiration_hours=settings.cache_expiration_hours)
    monitor = ConnectivityMonitor(initially_connected=not offline)
    probe = None
    if not offline:
        probe = ReachabilityProbe(
            monitor,
            settings.connectivity_probe_url,
            interval_seconds=settings.connectivity_probe_seconds,
            timeout=settings.http_timeout_seconds,
        )
    return CurrencyConverter(fetcher, store, monitor), probe


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fxconvert",
        description="Convert amounts between currencies with offline-cached exchange rates.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log to stdout")
    parser.add_argument("--offline", action="store_true", help="do not touch the network")
    parser.add_argument(
        "--provider",
        choices=[kind.value for kind in ProviderKind],
        help="rate provider (defaults to RATES_PROVIDER)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="convert an amount")
    convert.add_argument("amount", help="amount, '.' or ',' as decimal separator")
    convert.add_argument("--from", dest="from_code", metavar="CODE", help="source currency")
    convert.add_argument("--to", dest="to_code", metavar="CODE", help="target currency")
    convert.add_argument("--refresh", action="store_true", help="fetch fresh rates first")

    sub.add_parser("swap", help="swap the stored currency pair")
    sub.add_parser("refresh", help="fetch fresh rates")
    sub.add_parser("status", help="show network state and cached rates")
    sub.add_parser("currencies", help="list supported currencies")
    sub.add_parser("watch", help="follow network state changes until interrupted")
    return parser


def _list_currencies() -> int:
    for currency in Currency:
        print(f"{currency.value}  {currency.display_name}")
    return EXIT_OK


def _watch(converter: CurrencyConverter, probe: Optional[ReachabilityProbe],
           stop: Optional[threading.Event] = None) -> int:
    """
    Print the network state banner on every change until interrupted.

    Args:
        converter: Started converter
        probe: Reachability probe run in the background while watching
        stop: Event ending the watch (Ctrl-C otherwise)
    """
    if probe is None:
        print("Error: watch needs network access, drop --offline", file=sys.stderr)
        return EXIT_USAGE

    def on_event(event: ConverterEvent, conv: CurrencyConverter) -> None:
        if event is ConverterEvent.STATUS:
            print(format_status(conv.status), flush=True)

    converter.subscribe(on_event)
    print(format_status(converter.status), flush=True)

    stop = stop or threading.Event()
    probe.start()
    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        probe.stop()
    return EXIT_OK


def _run_command(args: argparse.Namespace, converter: CurrencyConverter) -> int:
    if args.command == "refresh":
        status = converter.fetch_rates()
        print(format_status(status))
        print(format_snapshot_summary(converter.snapshot))
        return EXIT_NO_RATES if status.is_error else EXIT_OK

    if args.command == "status":
        print(format_status(converter.status))
        print(format_snapshot_summary(converter.snapshot))
        print(f"Pair: {converter.from_currency} -> {converter.to_currency}")
        provider = converter.fetcher.get_last_provider() or converter.fetcher.default
        print(f"Provider: {provider.display_name}")
        return EXIT_NO_RATES if converter.status.is_error else EXIT_OK

    if args.command == "swap":
        converter.swap_currencies()
        print(f"Pair: {converter.from_currency} -> {converter.to_currency}")
        return EXIT_OK

    # convert
    if args.refresh:
        converter.fetch_rates()
    if args.from_code:
        converter.set_from_currency(Currency.from_code(args.from_code))
    if args.to_code:
        converter.set_to_currency(Currency.from_code(args.to_code))
    converter.set_amount(args.amount)

    print(format_status(converter.status))
    if converter.snapshot is None and converter.amount != 0:
        return EXIT_NO_RATES
    print(format_conversion(converter.amount, converter.from_currency,
                            converter.converted_amount, converter.to_currency))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, wire services and run one command.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)

    if args.command == "currencies":
        return _list_currencies()

    try:
        overrides = {"RATES_PROVIDER": args.provider} if args.provider else {}
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout and args.verbose,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    converter, probe = build_converter(settings, offline=args.offline)
    if probe is not None:
        probe.check()
    converter.start()

    if args.command == "watch":
        return _watch(converter, probe)

    try:
        return _run_command(args, converter)
    except (InvalidAmountError, InvalidCurrencyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
