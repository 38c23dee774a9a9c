"""Custom exceptions for the MOAC toolkit"""


class MoacError(Exception):
    """Base exception for all toolkit errors"""
    pass


class ConfigError(MoacError):
    """Configuration-related errors"""
    pass


class ConnectionError(MoacError):
    """Node unreachable or transport failure"""
    pass


class RPCError(MoacError):
    """Error payload returned by the node"""

    def __init__(self, message, code=None, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class ValidationError(MoacError, ValueError):
    """Malformed address, secret, amount or hash"""
    pass


class TransactionError(MoacError):
    """Transaction assembly or signing errors"""
    pass


class AbiError(MoacError):
    """Function missing from the ABI or arguments that cannot be encoded"""
    pass
