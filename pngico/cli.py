#!/usr/bin/env python3

# `pngico`: converts a folder of `{size}.png` files into an ICO, or
# extracts the PNGs inside an ICO into a folder
#
#     usage: `pngico icons/`              (writes `icons.ico`)
#            `pngico app.ico`             (writes into `app/`)
#            `pngico -c png app.ico -o out -O`

import argparse
import logging
import sys
from pathlib import Path

from pngico import __version__
from pngico.config import ConversionConfig
from pngico.decoder import extract_pngs
from pngico.encoder import create_ico
from pngico.errors import ConfigError, PngIcoError

MODE_AUTO = "auto"
MODE_ICO = "ico"
MODE_PNG = "png"

# resolves `auto` into `ico` or `png`, based on what `input_path` is
def resolve_mode(mode : str, input_path : Path) -> str:
    if mode != MODE_AUTO:
        return mode
    if input_path.is_file() and input_path.suffix.lower() == ".ico":
        return MODE_PNG
    if input_path.is_dir():
        return MODE_ICO
    raise ConfigError(f"{input_path}: can't tell what to convert (expected a .ico file or a folder). Specify --convert.")

# returns the output path used when none is specified: next to the input,
# with `.ico` appended (ICO mode) or stripped (PNG mode)
def default_output_path(mode : str, input_path : Path) -> Path:
    stem = input_path.stem
    if not stem:
        raise ConfigError(f"{input_path}: can't derive an output name from the input. Specify --output.")
    if mode == MODE_ICO:
        return input_path.parent / f"{stem}.ico"
    return input_path.parent / stem

def check_overwrite(output_path : Path, overwrite : bool):
    if overwrite or not output_path.exists():
        return
    if output_path.is_dir():
        raise ConfigError("The output folder already exists. Specify --overwrite to overwrite it.")
    raise ConfigError("The output file already exists. Specify --overwrite to overwrite it.")

def convert(mode : str, input_path, output_path=None, overwrite=False, conf : ConversionConfig = None) -> int:
    input_path = Path(input_path)
    mode = resolve_mode(mode, input_path)
    output_path = Path(output_path) if output_path else default_output_path(mode, input_path)
    logging.info(f"output: {output_path}")

    check_overwrite(output_path, overwrite)

    if mode == MODE_ICO:
        return create_ico(input_path, output_path, conf)
    else:
        return extract_pngs(input_path, output_path, conf)

def main(argv=None):
    # create configuration with defaults (+ environment overrides)
    conf = ConversionConfig()

    parser = argparse.ArgumentParser(prog="pngico", description="Converts a folder of PNG files into an ICO file, and vice versa")
    parser.add_argument("input", help="The input file/folder")
    parser.add_argument("-c", "--convert", choices=[MODE_AUTO, MODE_ICO, MODE_PNG], default=MODE_AUTO, help="The conversion target")
    parser.add_argument("-o", "--output", help="The output file/folder")
    parser.add_argument("-O", "--overwrite", action="store_true", help="Overwrite the output file/folder")
    parser.add_argument("--strict", action="store_true", default=conf.strict, help="Abort on the first PNG that can't be decoded, rather than skipping it")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    # overwrite configuration with any CLI args
    conf.strict = args.strict
    logging.debug(f"configuration: {conf}")

    try:
        convert(args.convert, args.input, args.output, args.overwrite, conf)
    except PngIcoError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    exit(main())
