# `pngico.config`: options shared by the encoder and the decoder
#
# defaults can be overridden with environment variables, which can in
# turn be overridden by the caller (e.g. CLI flags)

import os
import pprint

from pngico.naming import ICON_SIZES

def _is_truthy_envvar(s : str):
    sl = s.lower()
    return sl in {"on", "true", "yes", "1"}

class ConversionConfig:

    def __init__(
            self,
            *,
            strict=False,
            icon_sizes=ICON_SIZES):

        # when `True`, a PNG that can't be decoded (either an input
        # `{size}.png` or an entry in an ICO) aborts the whole conversion,
        # rather than being logged and skipped
        self.strict = _is_truthy_envvar(os.getenv("PNGICO_STRICT", str(strict)))

        # the canonical sizes used for looking up inputs and naming outputs
        self.icon_sizes = tuple(sorted(icon_sizes))

    def __repr__(self):
        return pprint.pformat(vars(self))
