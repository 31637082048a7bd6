# exceptions raised by `pngico`
#
# everything derives from `PngIcoError`, so callers (e.g. the CLI) can
# report any conversion failure with a single `except`

class PngIcoError(RuntimeError):
    pass

# the input/output paths can't be used (e.g. the output already exists
# and overwriting wasn't requested)
class ConfigError(PngIcoError):
    pass

# the input isn't a well-formed ICO container
class ContainerParseError(PngIcoError):
    pass

# the ICO container couldn't be written
class ContainerEncodeError(PngIcoError):
    pass

# an extracted PNG (or the folder it goes into) couldn't be written
class WriteError(PngIcoError):
    pass

# there was nothing to convert
class EmptyResultError(PngIcoError):
    pass

# an input `{size}.png` isn't a decodable PNG (only raised in strict mode)
class InputDecodeError(PngIcoError):
    pass

# an entry in the ICO container isn't a decodable PNG (only raised in strict mode)
class EntryDecodeError(PngIcoError):
    pass
