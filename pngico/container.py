# `pngico.container`: reads/writes the Windows ICO container format
#
# only PNG-compressed entries are produced, and only PNG-compressed
# entries can be decoded. Layout (all little-endian):
#
#     ICONDIR        reserved:u16 (0), type:u16 (1 = icon), count:u16
#     ICONDIRENTRY   width:u8, height:u8, color_count:u8, reserved:u8,
#                    planes:u16, bits_per_pixel:u16, size:u32, offset:u32
#     ...payloads, in entry order
#
# see: https://learn.microsoft.com/en-us/previous-versions/ms997538(v=msdn.10)

import io
import struct

from PIL import Image, UnidentifiedImageError

from pngico.errors import ContainerParseError

RESOURCE_TYPE_ICON = 1
RESOURCE_TYPE_CURSOR = 2

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_header = struct.Struct("<HHH")
_entry = struct.Struct("<BBBBHHII")

# number of channels for each PNG color type (IHDR)
_png_channels = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}

# what Pillow raises for input that isn't a (complete, sanely sized) PNG
#
# `DecompressionBombError` isn't an `OSError`, so it has to be listed
PNG_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError)

# opens `fp` as a PNG, reading only its header (size, mode)
#
# a JPEG, BMP, etc. with a `.png` name is rejected rather than converted
def open_png(fp) -> Image.Image:
    return Image.open(fp, formats=["PNG"])

# reads `fp` as a fully decoded PNG raster
def read_png(fp) -> Image.Image:
    image = open_png(fp)
    image.load()
    return image

# returns `(width, height, bits_per_pixel)` from a PNG's IHDR chunk, or
# `None` if `data` isn't a PNG stream with a readable IHDR
def _png_header_info(data : bytes):
    if not data.startswith(PNG_SIGNATURE) or len(data) < 26 or data[12:16] != b"IHDR":
        return None
    width, height, bit_depth, color_type = struct.unpack_from(">IIBB", data, 16)
    channels = _png_channels.get(color_type)
    if channels is None:
        return None
    return width, height, bit_depth * channels

class IconEntry:

    def __init__(self, width, height, bits_per_pixel, data : bytes):
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.data = data

    def __repr__(self):
        return f"IconEntry(width = {self.width}, height = {self.height}, bits_per_pixel = {self.bits_per_pixel}, size = {len(self.data)})"

    @property
    def is_png(self):
        return self.data.startswith(PNG_SIGNATURE)

    # creates a PNG-compressed entry from `image`
    #
    # the raster is stored as 32-bit RGBA, which is what OS icon loaders
    # expect from PNG entries
    @staticmethod
    def encode_as_png(image : Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        width, height = image.size
        return IconEntry(width, height, 32, buf.getvalue())

    # decodes the entry's payload into a raster
    #
    # raises if the payload isn't a PNG stream (e.g. a legacy bitmap entry)
    def decode(self) -> Image.Image:
        if not self.is_png:
            raise ValueError(f"{self!r} is not PNG-compressed (bitmap entries are not supported)")
        return read_png(io.BytesIO(self.data))

class IconDirectory:

    def __init__(self, entries=None):
        self.resource_type = RESOURCE_TYPE_ICON
        self.entries = list(entries) if entries else []

    def __repr__(self):
        return f"IconDirectory(entries = {self.entries!r})"

    def __len__(self):
        return len(self.entries)

    def add_entry(self, entry : IconEntry):
        self.entries.append(entry)

    def to_bytes(self) -> bytes:
        if len(self.entries) > 0xFFFF:
            raise ValueError(f"an ICO container can hold at most {0xFFFF} entries (got {len(self.entries)})")

        header = _header.pack(0, self.resource_type, len(self.entries))
        offset = _header.size + _entry.size * len(self.entries)

        records = []
        for entry in self.entries:
            # 0 means 256 (or, for PNG entries, "look in the PNG header")
            width = entry.width if entry.width < 256 else 0
            height = entry.height if entry.height < 256 else 0
            records.append(_entry.pack(width, height, 0, 0, 1, entry.bits_per_pixel, len(entry.data), offset))
            offset += len(entry.data)

        return header + b"".join(records) + b"".join(entry.data for entry in self.entries)

    def write(self, fp):
        fp.write(self.to_bytes())

    @staticmethod
    def from_bytes(data : bytes):
        if len(data) < _header.size:
            raise ContainerParseError(f"truncated header: expected at least {_header.size} bytes, got {len(data)}")

        reserved, resource_type, count = _header.unpack_from(data, 0)
        if reserved != 0:
            raise ContainerParseError(f"not an ICO file: reserved header field is {reserved} (expected 0)")
        if resource_type == RESOURCE_TYPE_CURSOR:
            raise ContainerParseError("cursor (.cur) resources are not supported")
        if resource_type != RESOURCE_TYPE_ICON:
            raise ContainerParseError(f"not an ICO file: unknown resource type {resource_type}")

        directory_end = _header.size + _entry.size * count
        if len(data) < directory_end:
            raise ContainerParseError(f"truncated directory: {count} entries need {directory_end} bytes, got {len(data)}")

        rv = IconDirectory()
        for i in range(count):
            width, height, _, _, _, bits_per_pixel, size, offset = _entry.unpack_from(data, _header.size + i * _entry.size)
            if offset < directory_end or offset + size > len(data):
                raise ContainerParseError(f"entry {i}: payload ({size} bytes at offset {offset}) lies outside of the image data")

            payload = data[offset:offset + size]
            width = width or 256
            height = height or 256

            # a PNG's own header is authoritative: the directory can't
            # represent sizes above 256, and some writers leave the depth as 0
            png_info = _png_header_info(payload)
            if png_info is not None:
                width, height, png_bits_per_pixel = png_info
                bits_per_pixel = bits_per_pixel or png_bits_per_pixel

            rv.add_entry(IconEntry(width, height, bits_per_pixel, payload))
        return rv

# reads an ICO container from a binary file object
def read_icon_directory(fp) -> IconDirectory:
    return IconDirectory.from_bytes(fp.read())
