# `pngico.decoder`: extracts each image in an ICO as a standalone PNG

import logging
from pathlib import Path

from pngico.config import ConversionConfig
from pngico.container import PNG_DECODE_ERRORS, read_icon_directory
from pngico.errors import ContainerParseError, EmptyResultError, EntryDecodeError, WriteError
from pngico.naming import entry_file_name

logger = logging.getLogger(__name__)

def load_icon_directory(input_file):
    try:
        with open(input_file, "rb") as fd:
            return read_icon_directory(fd)
    except OSError as ex:
        raise ContainerParseError(f"Can't open input .ico file: {ex}") from ex

def extract_pngs(input_file, output_dir, conf : ConversionConfig = None) -> int:
    """Writes every image in the ICO at `input_file` into `output_dir`.

    Files are named after each entry's geometry and bit depth (see
    `pngico.naming.entry_file_name`). `output_dir` (and its parents) are
    created if missing. Returns the number of PNG files written.
    """
    conf = conf or ConversionConfig()
    output_dir = Path(output_dir)

    icon_dir = load_icon_directory(input_file)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as ex:
        raise WriteError(f"Can't create output folder {output_dir}: {ex}") from ex

    written = set()
    for i, entry in enumerate(icon_dir.entries):
        try:
            image = entry.decode()
        except PNG_DECODE_ERRORS as ex:
            if conf.strict:
                raise EntryDecodeError(f"Can't decode image {i}: {ex}") from ex
            logger.warning(f"Can't decode image {i}: {ex}")
            continue

        file_name = entry_file_name(entry.width, entry.height, entry.bits_per_pixel, conf.icon_sizes)
        if file_name in written:
            logger.warning(f"Can't create {file_name}: an earlier image in the container was already extracted to it")
            continue

        try:
            fd = open(output_dir / file_name, "wb")
        except OSError as ex:
            logger.warning(f"Can't create {file_name}: {ex}")
            continue

        with fd:
            try:
                image.save(fd, format="PNG")
            except OSError as ex:
                raise WriteError(f"Can't write PNG file {file_name}: {ex}") from ex

        written.add(file_name)
        logger.info(f"Extracted {file_name}")

    if not written:
        raise EmptyResultError("No images could be extracted.")

    return len(written)
