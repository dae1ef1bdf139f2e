"""
Application Errors

Exception types raised by the wizard, the access checks and the upstream
service wrappers. Every error carries the HTTP status it maps to and a
user-facing (Dutch) message that is safe to show in a toast.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors rendered as ``{"error": message}`` responses."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class WizardValidationError(AppError):
    """A required field is missing or invalid. Nothing was mutated."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthenticationRequired(AppError):
    """No active session at a gated action."""

    status_code = 401

    def __init__(self, message: str = "Log in om deze functie te gebruiken."):
        super().__init__(message)
        self.redirect = "/auth"

    def to_dict(self) -> dict:
        return {"error": self.message, "redirect": self.redirect}


class PremiumRequired(AppError):
    """Premium model or feature requested without an active subscription."""

    status_code = 403

    def __init__(self, message: str = "Upgrade naar Pro om dit model te gebruiken."):
        super().__init__(message)


class AdminRequired(AppError):
    status_code = 403

    def __init__(self, message: str = "Alleen beheerders hebben toegang tot deze functie."):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class UpstreamError(AppError):
    """An external API (search, sitemap, LLM, payments) failed."""

    status_code = 502
