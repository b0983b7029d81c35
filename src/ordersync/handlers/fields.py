"""Field fallback chains for reading order documents written by different clients."""

from ordersync.collections import MIRRORED_FROM


def first_present(document: dict, fields: tuple[str, ...], default=None):
    """Return the first value along `fields` that is not None."""
    for name in fields:
        value = document.get(name)
        if value is not None:
            return value
    return default


def is_vendor_mirror(document: dict | None) -> bool:
    """Customer order documents written by the vendor-order mirror carry its marker."""
    return bool(document) and bool(document.get(MIRRORED_FROM))
