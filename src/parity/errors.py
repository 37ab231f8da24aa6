"""Domain exceptions shared by services and controllers."""


class LaunchError(Exception):
    """Base class for launch lifecycle errors."""

    status_code = 400


class LaunchNotFoundError(LaunchError):
    """Launch does not exist or belongs to another user."""

    status_code = 404

    def __init__(self, message: str = "Launch not found"):
        super().__init__(message)


class LaunchStateError(LaunchError):
    """Operation is not allowed in the launch's current status."""

    status_code = 409


class PoolNotFoundError(LaunchError):
    """Expected pool account is not present on-chain."""

    status_code = 404

    def __init__(self, message: str = "Pool not found on-chain"):
        super().__init__(message)


class CurveClientError(Exception):
    """Failure while talking to the bonding curve program."""

    status_code = 502


class CurveNotConfiguredError(CurveClientError):
    """No pool config address has been configured."""

    status_code = 503


class ConfigNotFoundError(CurveClientError):
    """Configured pool config account does not exist on-chain."""


class RpcError(CurveClientError):
    """Solana JSON-RPC returned an error or an unusable response."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code
