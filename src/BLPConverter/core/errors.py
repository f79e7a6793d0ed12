"""Exception types raised while decoding BLP2 data."""


class BLPError(ValueError):
    """Base class for every malformed or unsupported BLP input."""


class FormatError(BLPError):
    """Raised when the container itself is not a readable BLP2 file."""


class TooShortForMagic(FormatError):
    def __init__(self, size: int):
        self.size = size
        super().__init__("Invalid BLP file: too short to contain magic")


class UnsupportedVersion(FormatError):
    def __init__(self, magic: bytes):
        self.magic = bytes(magic)
        super().__init__("Invalid BLP file: unsupported format BLP1")


class UnknownMagic(FormatError):
    def __init__(self, magic: bytes):
        self.magic = bytes(magic)
        super().__init__(f"Invalid BLP file: unknown magic {self.magic!r}")


class TooShortForHeader(FormatError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Invalid BLP2 file: too short to contain header "
            f"({expected} expected, {actual} provided)"
        )


class DataError(BLPError):
    """Raised when mip payload bytes are missing or short."""


class TruncatedMipData(DataError):
    def __init__(self, requested_offset: int, requested_length: int,
                 available_length: int):
        self.requested_offset = requested_offset
        self.requested_length = requested_length
        self.available_length = available_length
        super().__init__(
            "Invalid BLP2 file: mipmap data is truncated "
            f"(bytes {requested_offset}..{requested_offset + requested_length} "
            f"requested, {available_length} available)"
        )


class TruncatedPixelData(DataError):
    def __init__(self, expected: int, actual: int, kind: str = "paletted"):
        self.expected = expected
        self.actual = actual
        self.kind = kind
        super().__init__(
            f"Invalid BLP2 {kind} mipmap: too short "
            f"({expected} expected, {actual} provided)"
        )


class EmptyMipChain(DataError):
    def __init__(self):
        super().__init__("Invalid BLP2 file: no mip levels present")


class UnsupportedFormat(BLPError):
    def __init__(self, format_name: str):
        self.format_name = format_name
        super().__init__(f"Unsupported BLP2 format: {format_name}")
