"""HTTP infrastructure for the assistants client."""

from .transport import Transport

__all__ = ["Transport"]
