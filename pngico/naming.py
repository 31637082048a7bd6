# `pngico.naming`: maps icon sizes to input file names, and icon entries
# (width, height, bit depth) to extracted file names

import re

# supported icon sizes, ascending
#
# source: https://learn.microsoft.com/en-us/windows/apps/design/style/iconography/app-icon-construction#icon-scaling
ICON_SIZES = (16, 20, 24, 30, 32, 36, 40, 48, 60, 64, 72, 80, 96, 256)

# the bit depth that entries produced by this tool have (RGBA)
DEFAULT_BITS_PER_PIXEL = 32

_entry_name_pattern = re.compile(r"(\d+)(?:x(\d+))?(?:@(\d+))?\.png")

def input_file_name(size : int) -> str:
    return f"{size}.png"

# yields `(size, file_name)` for each size the encoder looks for, in
# the order they should appear in the container
def candidate_input_names(icon_sizes=ICON_SIZES):
    for size in icon_sizes:
        yield size, input_file_name(size)

def entry_file_name(width : int, height : int, bits_per_pixel : int, icon_sizes=ICON_SIZES) -> str:
    """Returns the file name an extracted icon entry is written to.

    Square entries at a canonical size are named by their width alone
    (e.g. `48.png`). Anything else spells out both dimensions
    (`48x32.png`), and non-32-bit entries carry their depth (`16@8.png`).
    """
    file_name = f"{width}"
    if width != height or width not in icon_sizes:
        file_name += f"x{height}"
    if bits_per_pixel != DEFAULT_BITS_PER_PIXEL:
        file_name += f"@{bits_per_pixel}"
    return file_name + ".png"

# best-effort inverse of `entry_file_name`
#
# returns `(width, height, bits_per_pixel)`, or `None` if `file_name`
# isn't something `entry_file_name` could have produced
def parse_entry_file_name(file_name : str, icon_sizes=ICON_SIZES):
    m = _entry_name_pattern.fullmatch(file_name)
    if not m:
        return None

    width = int(m.group(1))
    height = int(m.group(2)) if m.group(2) else width
    bits_per_pixel = int(m.group(3)) if m.group(3) else DEFAULT_BITS_PER_PIXEL

    if entry_file_name(width, height, bits_per_pixel, icon_sizes) != file_name:
        return None
    return width, height, bits_per_pixel
