"""
errors.py — Exception taxonomy and user-facing error descriptions.

Collaborator failures never crash the view: they are caught at the
coordinator / callback boundary and turned into error states, which the
pages render with `describe_error`.
"""

from dataclasses import dataclass


class DashboardError(Exception):
    """Base class for every error the dashboard raises on purpose."""


class ServiceError(DashboardError):
    """A call into the backing service failed."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class SessionError(DashboardError):
    """No user identity could be obtained. Blocks the whole view."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause

    @property
    def code(self):
        return getattr(self.cause, "code", None)


class SubscriptionError(DashboardError):
    """One live collection stopped delivering snapshots."""

    def __init__(self, collection, cause=None):
        super().__init__(f"Live updates for {collection} failed: {cause}")
        self.collection = collection
        self.cause = cause

    @property
    def code(self):
        return getattr(self.cause, "code", None)


class MutationError(DashboardError):
    """An add / update / delete / upsert was not applied by the service."""

    def __init__(self, operation, collection, record_id=None, cause=None, message=None):
        target = f"{collection}/{record_id}" if record_id else collection
        super().__init__(message or f"Could not {operation} {target}: {cause}")
        self.operation = operation
        self.collection = collection
        self.record_id = record_id
        self.cause = cause

    @property
    def code(self):
        return getattr(self.cause, "code", None)


class ValidationError(MutationError):
    """The payload was rejected before reaching the service."""

    def __init__(self, collection, message, operation="save"):
        super().__init__(operation, collection, message=message)


class ReservedRecordError(MutationError):
    """Ordinary write against a system-owned record (e.g. auto shipping)."""

    def __init__(self, operation, collection, record_id=None):
        super().__init__(
            operation, collection, record_id,
            message=f"{collection}/{record_id or 'new'} is managed automatically and can't be {operation}d by hand",
        )


class SynthesizerWriteError(DashboardError):
    """The automatic shipping expense could not be written. Non-fatal."""

    def __init__(self, amount, cause=None):
        super().__init__(f"Could not update automatic shipping expense ({amount}): {cause}")
        self.amount = amount
        self.cause = cause

    @property
    def code(self):
        return getattr(self.cause, "code", None)


# ── User-facing descriptions ────────────────────────────────────────────────

@dataclass(frozen=True)
class ErrorDisplay:
    title: str
    message: str
    steps: tuple = ()


def _error_code(error):
    code = getattr(error, "code", None)
    if code is None and getattr(error, "cause", None) is not None:
        code = getattr(error.cause, "code", None)
    return str(code) if code is not None else None


def describe_error(error) -> ErrorDisplay:
    """Map an error to a title, explanation and fix-it steps."""
    code = _error_code(error)
    text = str(error)

    if code in ("invalid_api_key", "401") or "Invalid API key" in text:
        return ErrorDisplay(
            "Invalid Supabase API Key",
            "The SUPABASE_KEY in your .env is not valid. Make sure you copied the anon key of this project.",
            (
                "Open your Supabase project dashboard.",
                "Go to Project Settings → API.",
                "Copy the Project URL and the anon public key into .env (SUPABASE_URL / SUPABASE_KEY).",
            ),
        )
    if code == "anonymous_provider_disabled":
        return ErrorDisplay(
            "Supabase Authentication Not Enabled",
            "This app signs in anonymously when no owner login is configured, "
            "but anonymous sign-ins are disabled for this project.",
            (
                "Open your Supabase project dashboard.",
                "Go to Authentication → Sign In / Providers.",
                "Enable 'Allow anonymous sign-ins', or set SUPABASE_OWNER_EMAIL / SUPABASE_OWNER_PASSWORD.",
            ),
        )
    if code == "42501":
        return ErrorDisplay(
            "Database Permission Denied",
            "The app is connected, but row-level security is blocking it. "
            "Signed-in users must be allowed to read and write their own rows.",
            (
                "Open the SQL Editor in your Supabase dashboard.",
                "Paste the contents of supabase_schema.sql.",
                "Run it, then reload this page.",
            ),
        )
    if code == "PGRST205":
        return ErrorDisplay(
            "Database Tables Missing",
            "The orders / products / inventory / expenses tables were not found.",
            (
                "Open the SQL Editor in your Supabase dashboard.",
                "Run supabase_schema.sql.",
                "Run `python verify_supabase.py` to check the tables.",
            ),
        )
    if code is None:
        return ErrorDisplay(
            "Connection Error",
            f"Could not connect to the database. Please check your internet connection. ({text})",
        )
    return ErrorDisplay("An Unknown Error Occurred", f"An unexpected error occurred: {text}")
