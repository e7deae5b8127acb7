"""
Error types raised by the VeriShield engine.
"""


class VeriShieldError(Exception):
    """Base VeriShield exception."""
    pass


class InvalidInputError(VeriShieldError):
    """File info or scores handed to the engine are malformed."""
    pass


class ProviderError(VeriShieldError):
    """A signal provider failed while analyzing a file."""

    def __init__(self, category: str, message: str):
        super().__init__(f"{category} analysis failed: {message}")
        self.category = category


class InvariantViolationError(VeriShieldError):
    """Internal consistency check failed (e.g. fused score out of range)."""
    pass
