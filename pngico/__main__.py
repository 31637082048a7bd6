import sys

from pngico.cli import main

sys.exit(main())
