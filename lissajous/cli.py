#!/usr/bin/env python3
"""
Lissajous GIF generator

Writes one random animation to stdout, or serves them over HTTP.

Usage:
    python -m lissajous > out.gif
    python -m lissajous --size 50 --nframes 32 --seed 7 > out.gif
    python -m lissajous web --port 8000

Then open http://localhost:8000/?cycles=5&res=0.001&size=100&nframes=64&delay=8
"""

import argparse
import logging
import sys

import numpy as np

from . import params
from .params import RenderParams
from .render import lissajous
from .server import DEFAULT_HOST, DEFAULT_PORT, create_app, serve


def get_args(argv=None):
    p = argparse.ArgumentParser(prog="lissajous", description="Random Lissajous GIF generator")
    p.add_argument("mode", nargs="?", choices=["web"], help="Serve over HTTP instead of writing to stdout")
    p.add_argument("--host", default=DEFAULT_HOST, help="Listen address")
    p.add_argument("--port", type=int, default=DEFAULT_PORT, help="Listen port")
    p.add_argument("--cycles", type=float, default=params.DEFAULT_CYCLES, help="x oscillator revolutions")
    p.add_argument("--res", type=float, default=params.DEFAULT_RES, help="Angular resolution")
    p.add_argument("--size", type=int, default=params.DEFAULT_SIZE, help="Canvas half-size")
    p.add_argument("--nframes", type=int, default=params.DEFAULT_NFRAMES, help="Animation frames")
    p.add_argument("--delay", type=int, default=params.DEFAULT_DELAY, help="Frame delay in 10ms units")
    p.add_argument("--seed", type=int, default=None, help="Random seed for stdout output")
    p.add_argument("--log-level", type=str.upper, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging level")
    return p.parse_args(argv)


def run_web(args):
    print("=" * 60)
    print("Lissajous GIF Server")
    print("=" * 60)
    print(f"Listening on http://{args.host}:{args.port}/")
    print(f"Example: http://{args.host}:{args.port}/?cycles=5&res=0.001&size=100&nframes=64&delay=8")
    print("=" * 60)
    serve(create_app(), host=args.host, port=args.port)


def run_stdout(args):
    render = RenderParams(
        cycles=args.cycles,
        res=args.res,
        size=args.size,
        nframes=args.nframes,
        delay=args.delay,
    )
    lissajous(sys.stdout.buffer, render, rng=np.random.default_rng(args.seed))
    sys.stdout.buffer.flush()


def main(argv=None):
    args = get_args(argv)
    # stdout carries the GIF, so logs go to stderr
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.mode == "web":
        run_web(args)
    else:
        run_stdout(args)


if __name__ == "__main__":
    main()
