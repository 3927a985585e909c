"""Command-line entry point: log LoRa receiver packets to CSV, PNG or the console.

Usage examples:
  charter /dev/ttyUSB0                          # log each record at INFO
  charter /dev/ttyUSB0 -o packets.csv --create  # append rows, create the file
  charter COM4 --histogram plots/ --create      # one PNG histogram per record
  charter /dev/ttyUSB0 --config charter.yaml -d # settings from YAML, debug log
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config.runtime import CharterConfig, load_config
from .core.errors import SinkResourceMissing, TransportError
from .core.lifecycle import LifecycleController
from .core.pipeline import CsvSink, Dispatcher, HistogramSink, LogSink, RecordSink
from .core.reader import reader_loop
from .tools.debug import debug_enabled
from .transport.serial_port import SerialTransport

logger = logging.getLogger("charter")

EXIT_OK = 0
EXIT_FATAL = 1


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="charter", description="Record LoRa receiver packets")
    parser.add_argument("port", nargs="?", default=None, help="Serial port assigned to LoRa receiver")
    parser.add_argument("-d", "--debug", action="store_true", help="Log debug information")
    outputs = parser.add_mutually_exclusive_group()
    outputs.add_argument("-o", "--output", type=Path, default=None, help="CSV file name to print data to")
    outputs.add_argument(
        "--histogram",
        type=Path,
        default=None,
        metavar="DIR",
        help="Directory to render one histogram PNG per record into",
    )
    parser.add_argument(
        "-c",
        "--create",
        action="store_true",
        help="Allow the creation of a new CSV file (or histogram directory)",
    )
    parser.add_argument("--baud", type=int, default=None, help="Baud rate (default: 115200)")
    parser.add_argument("--timeout", type=float, default=None, help="Read timeout in seconds (default: 1.0)")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML configuration file")
    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def build_sink(config: CharterConfig) -> RecordSink:
    """Pick the single sink records are dispatched to."""
    if config.output is not None and config.histogram_dir is not None:
        raise ValueError("Configure either a CSV output or a histogram directory, not both")
    if config.output is not None:
        return CsvSink(config.output, create=config.create)
    if config.histogram_dir is not None:
        return HistogramSink(config.histogram_dir, create=config.create, prefix=config.histogram_prefix)
    return LogSink()


def run(
    config: CharterConfig,
    transport: SerialTransport,
    *,
    controller: Optional[LifecycleController] = None,
    install_signals: bool = True,
) -> int:
    """Handshake, receive until stopped, and map failures to an exit status."""
    controller = controller or LifecycleController()
    sink = build_sink(config)

    try:
        flag = controller.begin(transport, stop_channel=transport.try_clone())
    except TransportError as exc:
        logger.critical("Failed to start communication: %s", exc)
        return EXIT_FATAL

    if install_signals:
        controller.install_signal_handlers()
    try:
        return reader_loop(transport, Dispatcher(sink), flag, read_size=config.read_size)
    except (TransportError, SinkResourceMissing) as exc:
        logger.critical("%s", exc)
        return EXIT_FATAL
    except Exception:
        logger.exception("Unexpected error")
        return EXIT_FATAL
    finally:
        controller.finish()
        if install_signals:
            controller.restore_signal_handlers()


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            port=args.port,
            output=args.output,
            histogram_dir=args.histogram,
            create=True if args.create else None,
            baudrate=args.baud,
            timeout_s=args.timeout,
            debug=True if args.debug else None,
        )
    except (OSError, ValueError) as exc:
        configure_logging(args.debug)
        logger.critical("Invalid configuration: %s", exc)
        return EXIT_FATAL

    configure_logging(config.debug or debug_enabled())

    if not config.port:
        logger.critical("No serial port given (pass PORT or set 'port' in the config file)")
        return EXIT_FATAL

    # Signal handlers are only installed once the start command is out;
    # Ctrl+C before that arrives as KeyboardInterrupt.
    try:
        try:
            transport = SerialTransport.open(config.port, config.baudrate, config.timeout_s)
        except TransportError as exc:
            logger.critical("%s", exc)
            return EXIT_FATAL

        with transport:
            try:
                return run(config, transport)
            except ValueError as exc:
                logger.critical("%s", exc)
                return EXIT_FATAL
    except KeyboardInterrupt:
        logger.info("Interrupted during setup, exiting")
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
