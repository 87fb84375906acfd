from .generic import GenericSessionBackend
from .postgres import PostgresSessionBackend

_BY_VENDOR = {
    "postgresql": PostgresSessionBackend,
}


def backend_for_vendor(vendor: str):
    """Return a session backend instance for a Django connection vendor."""
    return _BY_VENDOR.get(vendor, GenericSessionBackend)()


__all__ = ["GenericSessionBackend", "PostgresSessionBackend", "backend_for_vendor"]
