from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from typing import List

from .config import EngineConfig, load_engine_config
from .diamond import Diamond
from .edo import Edo
from .lattice import Lattice
from .playback import compare_events, ratio_events, seconds_to_ticks, write_midi
from .ratio import IntWidth, Ratio, RatioOverflowError

logger = logging.getLogger(__name__)

_INDEX_LIST_RE = re.compile(r"^-?\d+(,\s*-?\d+)*$")


def _protect_index_lists(argv: List[str]) -> List[str]:
    # argparse takes "-1,0,2" for an option; a leading space keeps it a value
    return [" " + a if a.startswith("-") and _INDEX_LIST_RE.match(a) else a for a in argv]


def _ratio_arg(text: str) -> Ratio:
    try:
        return Ratio.parse(text, IntWidth.BIG)
    except (ValueError, ZeroDivisionError) as exc:
        raise argparse.ArgumentTypeError(f"invalid ratio '{text}': {exc}") from None


def _index_list_arg(text: str) -> List[int]:
    if not _INDEX_LIST_RE.match(text.strip()):
        raise argparse.ArgumentTypeError(f"invalid index list '{text}' (expected e.g. 1,0,-2)")
    return [int(part) for part in text.split(",")]


def _width_arg(text: str) -> IntWidth:
    try:
        return IntWidth.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _positive_int_arg(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'")
    return value


def _configure_logging(verbose: bool) -> None:
    debug = verbose or bool(os.environ.get("JI_ENGINE_DEBUG"))
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="[%(name)s] %(levelname)s %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("ji_engine").setLevel(level)


def _print_ratio(ratio: Ratio) -> None:
    print(f"{ratio}\t{ratio.to_approximate_equal_tempered_interval()}")


def _cmd_diamond(args: argparse.Namespace, cfg: EngineConfig) -> int:
    identities = args.limits if args.limits else cfg.diamond_identities
    print(Diamond(identities, width=cfg.width))
    return 0


def _cmd_lattice(args: argparse.Namespace, cfg: EngineConfig) -> int:
    if args.ratios:
        lattice = Lattice.from_ratios(r.with_width(cfg.width) for r in args.ratios)
    else:
        lattice = cfg.build_lattice()
    for ratio in lattice.at_many(args.indices or []):
        _print_ratio(ratio)
    return 0


def _cmd_ratios(args: argparse.Namespace, cfg: EngineConfig) -> int:
    for ratio in args.ratios or []:
        _print_ratio(ratio.with_width(cfg.width))
    return 0


def _cmd_edo(args: argparse.Namespace, cfg: EngineConfig) -> int:
    for interval in Edo(args.edo).intervals():
        print(f"{interval}\t{interval.to_approximate_12_edo_interval()}")
    return 0


def _cmd_play(args: argparse.Namespace, cfg: EngineConfig) -> int:
    ratio = args.ratio.with_width(cfg.width)
    out_path = args.out or cfg.out
    tone = seconds_to_ticks(cfg.tone_seconds, cfg.ppq, cfg.bpm)
    write_midi(ratio_events(ratio, tone, root_hz=cfg.root_hz), cfg.ppq, cfg.bpm, out_path)
    print(f"Wrote {out_path} ({ratio}, root={cfg.root_hz:.2f} Hz)")
    return 0


def _cmd_compare(args: argparse.Namespace, cfg: EngineConfig) -> int:
    ratio = args.ratio.with_width(cfg.width)
    out_path = args.out or cfg.out
    tone = seconds_to_ticks(cfg.tone_seconds, cfg.ppq, cfg.bpm)
    gap = seconds_to_ticks(cfg.gap_seconds, cfg.ppq, cfg.bpm)
    events = compare_events(ratio, tone, gap, root_hz=cfg.root_hz)
    write_midi(events, cfg.ppq, cfg.bpm, out_path)
    approx = ratio.to_approximate_equal_tempered_interval()
    print(f"Wrote {out_path} ({ratio} vs {approx.interval.name})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ji-engine",
        description="Tools for working with JI ratios, lattices, and tonality diamonds",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", default=None, help="Path to JSON config")
    parser.add_argument(
        "--width",
        type=_width_arg,
        default=None,
        help="Integer width for ratio arithmetic: i8, i16, i32, i64, i128 or big (default i32)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_play = subparsers.add_parser("play", help="Render a ratio as a dyad above middle C to MIDI")
    p_play.add_argument("-r", "--ratio", type=_ratio_arg, required=True, help="Ratio such as 3/2")
    p_play.add_argument("--out", default=None, help="Output MIDI path (default from config)")
    p_play.set_defaults(func=_cmd_play)

    p_compare = subparsers.add_parser(
        "compare", help="Render a ratio's dyad followed by the nearest 12-EDO dyad to MIDI"
    )
    p_compare.add_argument("-r", "--ratio", type=_ratio_arg, required=True, help="Ratio such as 3/2")
    p_compare.add_argument("--out", default=None, help="Output MIDI path (default from config)")
    p_compare.set_defaults(func=_cmd_compare)

    p_diamond = subparsers.add_parser("diamond", help="Display a tonality diamond built from the given limits")
    p_diamond.add_argument(
        "-l", "--limits", type=_positive_int_arg, nargs="+", default=None, help="Identities (default: 1 5 3)"
    )
    p_diamond.set_defaults(func=_cmd_diamond)

    p_lattice = subparsers.add_parser("lattice", help="Query an n-dimensional JI lattice")
    p_lattice.add_argument(
        "-r", "--ratios", type=_ratio_arg, nargs="+", default=None, help="Generating ratios (default: 3/2 5/4)"
    )
    p_lattice.add_argument(
        "-i", "--indices", type=_index_list_arg, nargs="*", default=None,
        help="Comma-separated index lists, e.g. 0,0,1 1,1,1 -1,0,2",
    )
    p_lattice.set_defaults(func=_cmd_lattice)

    p_ratios = subparsers.add_parser("ratios", help="Find the 12-EDO approximation of JI ratios")
    p_ratios.add_argument("-r", "--ratio", dest="ratios", type=_ratio_arg, nargs="*", default=None)
    p_ratios.set_defaults(func=_cmd_ratios)

    p_edo = subparsers.add_parser("edo", help="Show the steps of an EDO compared to 12-EDO")
    p_edo.add_argument("-e", "--edo", type=_positive_int_arg, required=True, help="Number of divisions")
    p_edo.set_defaults(func=_cmd_edo)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_protect_index_lists(sys.argv[1:] if argv is None else list(argv)))
    _configure_logging(args.verbose)

    cfg = EngineConfig()
    if args.config:
        try:
            cfg = load_engine_config(args.config)
        except (OSError, ValueError, ZeroDivisionError) as exc:
            parser.error(f"could not load config {args.config}: {exc}")
    if args.width is not None:
        cfg.width = args.width
    logger.debug("command=%s width=%s", args.command, cfg.width.name)

    try:
        return args.func(args, cfg)
    except RatioOverflowError as exc:
        print(f"error: {exc} (try a wider --width)", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
