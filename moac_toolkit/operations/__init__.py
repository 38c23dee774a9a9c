"""High-level operations"""

from .transfer import transfer_moac

__all__ = ["transfer_moac"]
