#!/usr/bin/env python3
"""
segcode - Command Line Interface

Entry point for the segcode package.
"""

import argparse
import logging
import sys

from segcode.__version__ import __version__

log = logging.getLogger(__name__)


def _setup_logging(verbose=0):
    """Configure logging from -v count."""
    if verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s')
        logging.getLogger('PIL').setLevel(logging.WARNING)
    elif verbose == 1:
        logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='[%(levelname)s] %(message)s')


def _add_config_options(parser):
    """Options shared by generate, preview and config."""
    order = parser.add_mutually_exclusive_group()
    order.add_argument("--order", help="Custom segment order, e.g. 'dp g f e d c b a'")
    order.add_argument("--preset", choices=["forward", "reverse"], help="Built-in segment order")
    parser.add_argument("--bit-order", dest="bit_order", choices=["msb", "lsb"])
    parser.add_argument("--polarity", choices=["common_cathode", "common_anode", "cc", "ca"])
    parser.add_argument("--format", dest="number_format", choices=["bin", "dec", "hex"])
    parser.add_argument("--style", dest="output_style", choices=["array", "macro", "enum"])
    parser.add_argument("--scan", dest="scan_mode", choices=["static", "dynamic"])
    parser.add_argument("--digits", dest="digit_count", type=int, help="Digit count for dynamic scan (1-12)")
    parser.add_argument("--charset", help="Characters to encode, e.g. '0123456789ABCDEF '")
    parser.add_argument("--sample", help="Sample text for the dynamic-scan preview")
    parser.add_argument("--no-config", dest="no_config", action="store_true",
                        help="Ignore saved defaults")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="segcode",
        description="Seven-segment lookup table generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    segcode generate                       Table for 0-9 with saved defaults
    segcode generate --format hex --style macro
    segcode generate --order "dp g f e d c b a" --polarity ca
    segcode generate --scan dynamic --digits 4 -o segs.h
    segcode preview --sample 12 --scan dynamic --image preview.png
    segcode toggle 7 f                     Add segment f to '7'
    segcode reset 7                        Restore built-in '7'
    segcode config --format hex            Save hex as default format
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Print segment lookup tables")
    _add_config_options(gen_parser)
    gen_parser.add_argument("--output", "-o", help="Write code to file instead of stdout")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Show preview characters")
    _add_config_options(preview_parser)
    preview_parser.add_argument("--image", "-i", help="Also save a PNG preview")
    preview_parser.add_argument("--size", type=int, default=80, help="Digit width in pixels")

    # Toggle command
    toggle_parser = subparsers.add_parser("toggle", help="Toggle one segment of a character")
    toggle_parser.add_argument("char", help="Character to edit ('space' for blank)")
    toggle_parser.add_argument("segment", help="Segment a-g or dp")

    # Reset command
    reset_parser = subparsers.add_parser("reset", help="Restore a character's built-in pattern")
    reset_parser.add_argument("char", nargs="?", help="Character to reset")
    reset_parser.add_argument("--all", "-a", action="store_true", help="Reset every override")

    # Config command
    config_parser = subparsers.add_parser("config", help="Save or show default options")
    _add_config_options(config_parser)
    config_parser.add_argument("--show", action="store_true", help="Print saved defaults")

    args = parser.parse_args()
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "generate":
        return generate_code(args, output=args.output)
    elif args.command == "preview":
        return show_preview(args, image=args.image, size=args.size)
    elif args.command == "toggle":
        return toggle_segment(args.char, args.segment)
    elif args.command == "reset":
        return reset_char(args.char, reset_all=args.all)
    elif args.command == "config":
        return configure(args, show=args.show)

    return 0


def _parse_char(text):
    """CLI spelling of a character: 'space' means ' '."""
    if text.lower() == "space":
        return " "
    if len(text) != 1:
        raise ValueError(f"expected a single character, got {text!r}")
    return text


def _build_session(args):
    """Saved defaults (unless --no-config) overlaid with command-line options."""
    from segcode.conf import config_from_dict, load_config
    from segcode.core.models import (
        BitOrder,
        NumberFormat,
        OrderPreset,
        OutputStyle,
        Polarity,
        ScanMode,
    )
    from segcode.services import GeneratorSession

    saved = {} if getattr(args, 'no_config', False) else load_config()
    config, patterns, sample = config_from_dict(saved)
    session = GeneratorSession(config, patterns, sample)

    polarity = getattr(args, 'polarity', None)
    polarity = {'cc': 'common_cathode', 'ca': 'common_anode'}.get(polarity, polarity)
    changes = {}
    if getattr(args, 'bit_order', None):
        changes['bit_order'] = BitOrder(args.bit_order)
    if polarity:
        changes['polarity'] = Polarity(polarity)
    if getattr(args, 'number_format', None):
        changes['number_format'] = NumberFormat(args.number_format)
    if getattr(args, 'output_style', None):
        changes['output_style'] = OutputStyle(args.output_style)
    if getattr(args, 'scan_mode', None):
        changes['scan_mode'] = ScanMode(args.scan_mode)
    if getattr(args, 'digit_count', None) is not None:
        changes['digit_count'] = args.digit_count
    if getattr(args, 'charset', None) is not None:
        changes['charset'] = tuple(args.charset)
    if changes:
        session.update(**changes)

    if getattr(args, 'sample', None) is not None:
        session.set_sample_text(args.sample)

    if getattr(args, 'preset', None):
        session.select_preset(OrderPreset(args.preset))
    elif getattr(args, 'order', None):
        session.preset = OrderPreset.CUSTOM
        session.set_custom_order(args.order)

    return session


def _print_warnings(warnings):
    for w in warnings:
        print(f"Warning: {w}", file=sys.stderr)


def generate_code(args, output=None):
    """Print (or write) the generated tables."""
    try:
        session = _build_session(args)
        result = session.generate()
        _print_warnings(result.warnings)

        if output:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(result.code + "\n")
            print(f"Wrote {len(result.entries)} entries to {output}")
        else:
            print(result.code)
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def show_preview(args, image=None, size=80):
    """Print ASCII preview of the preview characters; optionally save PNG."""
    try:
        from segcode.preview import render_ascii, render_image

        session = _build_session(args)
        result = session.generate()
        _print_warnings(result.warnings)

        cells = [session.patterns.effective_pattern(ch) for ch in result.preview]
        print(render_ascii(cells))
        print(" ".join(f"{e.char!r}={e.text}" for e in result.entries
                       if e.char in result.preview))

        if image:
            render_image(cells, size=size).save(image)
            print(f"Saved preview: {image}")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def _load_overrides():
    """Saved config dict and its overrides; bad entries are logged and skipped."""
    from segcode.conf import config_from_dict, load_config

    config = load_config()
    _, patterns, _ = config_from_dict(config)
    return config, patterns


def toggle_segment(char, segment):
    """Flip one segment of a character and save it as an override."""
    try:
        from segcode.conf import save_config
        from segcode.patterns import sorted_segments

        ch = _parse_char(char)
        config, patterns = _load_overrides()
        active = patterns.toggle_segment(ch, segment.lower())
        config['overrides'] = patterns.to_dict()
        save_config(config)
        print(f"{ch!r}: {' '.join(sorted_segments(active)) or '(blank)'}")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def reset_char(char=None, reset_all=False):
    """Drop one (or every) saved override."""
    try:
        from segcode.conf import save_config

        config, patterns = _load_overrides()
        if reset_all:
            patterns.clear()
            print("All overrides cleared")
        elif char is not None:
            ch = _parse_char(char)
            patterns.reset_override(ch)
            print(f"{ch!r} restored to built-in pattern")
        else:
            print("Error: give a character or --all")
            return 1
        config['overrides'] = patterns.to_dict()
        save_config(config)
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


def configure(args, show=False):
    """Save command-line options as defaults, or show saved defaults."""
    try:
        import json

        from segcode.conf import CONFIG_PATH, config_to_dict, load_config, save_config

        if show:
            print(f"# {CONFIG_PATH}")
            print(json.dumps(load_config(), indent=2, ensure_ascii=False))
            return 0

        from segcode.services import normalize_config

        session = _build_session(args)
        config, warnings = normalize_config(session.config)
        if session.order_error:
            warnings.insert(0, session.order_error)
        _print_warnings(warnings)
        save_config(config_to_dict(config, session.patterns, session.sample_text))
        print(f"Saved defaults to {CONFIG_PATH}")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
