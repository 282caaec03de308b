from .loader import load_bundled_collection, load_collection

__all__ = ["load_collection", "load_bundled_collection"]
