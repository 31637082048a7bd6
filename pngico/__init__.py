__version__ = "1.0.0"

from pngico.naming import ICON_SIZES, entry_file_name
from pngico.container import IconDirectory, IconEntry, read_icon_directory
from pngico.config import ConversionConfig
from pngico.encoder import create_ico
from pngico.decoder import extract_pngs
