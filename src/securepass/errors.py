"""
Custom exceptions for SecurePass.
"""

class SecurePassError(Exception):
    """Base exception for SecurePass."""
    pass

class ValidationError(SecurePassError):
    """Rejected analysis request input."""
    pass

class BreachLookupError(SecurePassError):
    """Breach provider request or response failures."""
    pass

class AnalysisError(SecurePassError):
    """Unexpected failures while scoring a password."""
    pass

class StorageError(SecurePassError):
    """Persistence collaborator failures."""
    pass
