"""
Custom exceptions for diagsnap
"""


class DiagsnapError(Exception):
    """Base exception for all diagsnap errors"""
    pass


class ConfigError(DiagsnapError):
    """Configuration could not be parsed, validated or resolved"""
    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found"""
    pass


class SnapshotError(DiagsnapError):
    """Error reading or writing a snapshot file"""
    pass
