#!/usr/bin/env python3
"""
gen_bindings.py - Python binding generator entry point

Generates a ctypes binding module for each API description given.

Usage:
    python scripts/gen_bindings.py --module gir/Foo.json [--module ...]
                                   [--config prefixes.json] [--out DIR]
"""

import argparse
import os
import sys

# Get paths
script_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.abspath(os.path.join(script_dir, '..'))

# Add scripts directory to path
sys.path.insert(0, script_dir)

from gir_bindgen import Config, GenerationError, Generator, Registry
from bindings import gnome


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate Python ctypes bindings')
    parser.add_argument('--module', action='append', required=True, metavar='JSON',
                        help='API description of one namespace (repeatable)')
    parser.add_argument('--config', default=None,
                        help='JSON file with "prefixes" and "names" tables')
    parser.add_argument('--out', default=os.path.join(root_dir, 'gen/bindings'),
                        help='Output directory for generated modules')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    gen = Generator(config=Config(), output_root=args.out)

    # Apply GNOME defaults, then the user's overrides
    gnome.configure(gen)
    try:
        if args.config:
            gen.configure(Config.load(args.config))
        registries = [Registry.load(path) for path in args.module]
        gen.generate_all(registries)
    except GenerationError as e:
        print(f'  >> error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
