"""Deterministic tag colors.

Maps tag strings onto a fixed palette with a 32-bit string hash so the
same tag is always drawn in the same color.
"""

PALETTE: tuple[str, ...] = (
    "#093145",
    "#107896",
    "#60d878",
    "#DB504A",
    "#9A2617",
    "#58d4c8",
    "#747C92",
    "#c16ed6",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def string_hash(text: str) -> int:
    """Compute the signed 32-bit hash of a string.

    Iterates ``hash = (hash << 5) - hash + unit`` over UTF-16 code units,
    wrapping to 32 bits after every step.

    Args:
        text: Input string

    Returns:
        Signed 32-bit integer (0 for the empty string)
    """
    result = 0
    for unit in _utf16_code_units(text):
        result = _to_int32((result << 5) - result + unit)
    return result


def color_for(tag: str) -> str:
    """Return the palette color for a tag."""
    return PALETTE[abs(string_hash(tag)) % len(PALETTE)]
