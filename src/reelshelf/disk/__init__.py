from .provider import DiskProvider

__all__ = ["DiskProvider"]
