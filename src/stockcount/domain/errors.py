class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    pass


class NotFoundError(AppError):
    pass


class ErpApiError(AppError):
    """Backend call failed (network, server or simulated fault)."""


class ProviderNotImplementedError(AppError):
    pass
