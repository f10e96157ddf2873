# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, List, TextIO

from configuration import read_config, setup
from debug import COMPONENTS, Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from utilities import check_message, describe_catalog, format_blocks, strip_whitespace

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the simulator."""

    block: int = 5                  # output group size
    verbose: bool = False           # log every component
    log_file: str | None = None     # also log to this file


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def is_settings_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def process(machine: Machine, lines: Iterable[str], block: int = 5) -> Iterator[str]:
    """Yield one output line per input line.

    Settings lines reconfigure MACHINE and produce nothing. Blank lines
    before the first settings line are echoed; any other text there is an
    error. Message lines are converted and printed in groups of BLOCK.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_settings_line(line):
            setup(machine, line.strip())
            configured = True
            continue
        if not configured:
            if line.strip():
                raise ConfigError("Input must start with a settings line")
            yield ""
            continue
        check_message(line, machine.alphabet)
        yield format_blocks(machine.convert(strip_whitespace(line)), block)

    if not configured:
        raise ConfigError("Input must have a settings line")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="enigma",
        description="Encrypt or decrypt messages with a rotor machine",
    )
    p.add_argument("config", metavar="CONFIG", help="Machine description (text format, or *.json).")
    p.add_argument("input", metavar="INPUT", nargs="?", help="Messages to convert. Default: standard input.")
    p.add_argument("output", metavar="OUTPUT", nargs="?", help="Where to write results. Default: standard output.")
    p.add_argument("--block", type=int, default=5, help="Letters per output group. Default: 5")
    p.add_argument("--verbose", action="store_true", help="Log stepping, plugboard and wiring details.")
    p.add_argument("--log-file", dest="log_file", metavar="FILE", help="Also write the log to FILE.")
    p.add_argument("--list-wheels", dest="list_wheels", action="store_true",
                   help="Print the wheels CONFIG defines and exit.")
    return p.parse_args(argv)


def configure_logging(cfg: Config) -> None:
    if cfg.log_file:
        Debug.add_file(cfg.log_file)
    if cfg.verbose:
        debug.enable(*COMPONENTS)
    else:
        debug.disable(*COMPONENTS)


def run(machine: Machine, source: TextIO, sink: TextIO, cfg: Config) -> None:
    for out in process(machine, source, cfg.block):
        sink.write(out + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, verbose=args.verbose, log_file=args.log_file)

    try:
        if cfg.block <= 0:
            raise ConfigError(f"--block must be positive, got {cfg.block}")
        configure_logging(cfg)
        machine = read_config(args.config)

        if args.list_wheels:
            print("\n".join(describe_catalog(machine.catalog)))
            return

        source = open(args.input, encoding="utf-8") if args.input else sys.stdin
        try:
            sink = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
            try:
                run(machine, source, sink, cfg)
            finally:
                if sink is not sys.stdout:
                    sink.close()
        finally:
            if source is not sys.stdin:
                source.close()
    except (EnigmaError, OSError) as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
