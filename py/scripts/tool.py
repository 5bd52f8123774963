#!/usr/bin/env python3
import argparse
import logging
import sys

from pulsetrain.decoder import decode
from pulsetrain.export import encode_frame, to_c_header
from pulsetrain.generator import pulse_train
from pulsetrain.registry import default_registry
from pulsetrain.util import sample_period_ticks, sample_rate_hz
from pulsetrain.validation import validate_pulse_train
from pulsetrain.vcd import dump_vcd

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        prog="pulsetrain-tool.py",
        description="Generate crank/cam/TDC pulse trains for driving ECU inputs"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        help="List the known engine configurations",
    )

    parser.add_argument(
        "--config",
        action="store",
        default="v6-60-2",
        help="Engine configuration to generate",
    )

    parser.add_argument(
        "--width",
        action="store",
        type=int,
        choices=[8, 16, 32],
        default=8,
        help="Output port width in bits",
    )

    parser.add_argument(
        "--rpm",
        action="store",
        type=float,
        default=1000.0,
        help="Engine speed used for timing and waveform output",
    )

    parser.add_argument(
        "--vcd",
        action="store",
        help="Write the pulse train as a VCD waveform to this file"
    )

    parser.add_argument(
        "--cycles",
        action="store",
        type=int,
        default=2,
        help="Number of engine cycles in the VCD waveform"
    )

    parser.add_argument(
        "--header",
        action="store",
        help="Write the pulse train as a C header to this file"
    )

    parser.add_argument(
        "--frame",
        action="store_true",
        default=False,
        help="Write the pulse train as a COBS framed CBOR message to stdout"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging"
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    registry = default_registry()

    if args.list:
        for name, config in registry.items():
            print(f"{name}: {config.cylinders.val()} cylinders, crank {config.crank}, "
                  f"{len(config.cam.used_edges)} cam edges, TDC0 at {config.ref_to_tdc0}")
        sys.exit(0)

    if args.config not in registry:
        print(f"Unknown configuration: {args.config}", file=sys.stderr)
        sys.exit(1)

    config = registry[args.config]
    try:
        pt = pulse_train(config, args.width)
        sample_rate = sample_rate_hz(args.rpm)
        period = sample_period_ticks(args.rpm)
    except ValueError as e:
        print(f"{args.config}: {e}", file=sys.stderr)
        sys.exit(1)

    is_valid, msg = validate_pulse_train(pt, config)
    if not is_valid:
        print(f"{args.config}: generated pulse train is invalid: {msg}", file=sys.stderr)
        sys.exit(1)

    print(f"{args.config}: {sample_rate:.0f} samples/s at {args.rpm:.0f} rpm, "
          f"timer period {period} ticks", file=sys.stderr)

    if args.vcd:
        dump_vcd(decode(pt), args.vcd, rpm=args.rpm, cycles=args.cycles)

    if args.header:
        with open(args.header, "w") as f:
            f.write(to_c_header(pt, name=args.config.replace("-", "_")))

    if args.frame:
        sys.stdout.buffer.write(encode_frame(args.config, pt))
        sys.stdout.buffer.flush()
