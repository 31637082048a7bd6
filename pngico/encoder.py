# `pngico.encoder`: packs a folder of `{size}.png` files into an ICO

import logging
from pathlib import Path

from pngico.config import ConversionConfig
from pngico.container import PNG_DECODE_ERRORS, IconDirectory, IconEntry, open_png
from pngico.errors import ContainerEncodeError, EmptyResultError, InputDecodeError
from pngico.naming import candidate_input_names

logger = logging.getLogger(__name__)

def _decode_failed(file_name : str, ex : Exception, conf : ConversionConfig):
    if conf.strict:
        raise InputDecodeError(f"Can't decode {file_name}: {ex}") from ex
    logger.warning(f"Can't decode {file_name}: {ex}")

# returns the decoded `{size}.png` in `input_dir`, or `None` if it should
# be skipped (missing, unreadable, not a PNG, not `icon_size`×`icon_size`)
#
# the size is checked from the PNG header, so mis-sized inputs are never
# decompressed
def _try_read_input(input_dir : Path, icon_size : int, file_name : str, conf : ConversionConfig):
    try:
        fd = open(input_dir / file_name, "rb")
    except FileNotFoundError:
        return None  # sparse size sets are normal
    except OSError as ex:
        logger.warning(f"Can't open {file_name}: {ex}")
        return None

    with fd:
        try:
            image = open_png(fd)
        except PNG_DECODE_ERRORS as ex:
            _decode_failed(file_name, ex, conf)
            return None

        if image.size != (icon_size, icon_size):
            width, height = image.size
            logger.warning(f"{file_name} must be {icon_size}×{icon_size} px, but is {width}×{height} px instead.")
            return None

        try:
            image.load()
        except PNG_DECODE_ERRORS as ex:
            _decode_failed(file_name, ex, conf)
            return None
        return image

# builds (but doesn't write) the icon directory for `input_dir`
def build_icon_directory(input_dir, conf : ConversionConfig = None) -> IconDirectory:
    conf = conf or ConversionConfig()
    input_dir = Path(input_dir)

    icon_dir = IconDirectory()
    for icon_size, file_name in candidate_input_names(conf.icon_sizes):
        image = _try_read_input(input_dir, icon_size, file_name, conf)
        if image is None:
            continue

        icon_dir.add_entry(IconEntry.encode_as_png(image))
        logger.info(f"Added {file_name}")

    return icon_dir

def create_ico(input_dir, output_file, conf : ConversionConfig = None) -> int:
    """Creates `output_file` from the `{size}.png` files in `input_dir`.

    Missing sizes are skipped silently, while unreadable or wrongly sized
    files are logged and skipped. Any existing `output_file` is
    overwritten. Returns the number of images in the written container.

    Raises `EmptyResultError` (without creating `output_file`) if none of
    the canonical sizes could be used.
    """
    output_file = Path(output_file)

    icon_dir = build_icon_directory(input_dir, conf)
    if len(icon_dir) == 0:
        raise EmptyResultError("No suitable PNG files found.")

    # serialize up-front, so that a failure can't leave a partial file behind
    content = icon_dir.to_bytes()
    try:
        with open(output_file, "wb") as fd:
            fd.write(content)
    except OSError as ex:
        raise ContainerEncodeError(f"Can't write {output_file}: {ex}") from ex

    logger.info(f"Created {output_file.name} with {len(icon_dir)} images.")
    return len(icon_dir)
