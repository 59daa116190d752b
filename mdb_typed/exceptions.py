"""
Exceptions for MDB_TYPED.

Expected outcomes (a missing document, an undecodable record) are never
raised: they surface as ``None`` or are dropped from listings. These
exceptions cover setup and input problems only. Store-level failures are
the driver's own ``pymongo.errors`` and propagate untouched.
"""

from typing import Any


def _with_fields(context: dict[str, Any] | None, **fields: Any) -> dict[str, Any]:
    """Copy ``context`` and add every field that is not None."""
    merged = dict(context or {})
    merged.update({k: v for k, v in fields.items() if v is not None})
    return merged


class MdbTypedError(RuntimeError):
    """
    Root of the package's exception hierarchy.

    ``context`` carries structured details (collection, key, path) that are
    appended to ``str(error)`` and are available to log handlers.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (context: {details})"


class InitializationError(MdbTypedError):
    """The store could not be reached when opening the connection."""

    def __init__(
        self,
        message: str,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with_fields(context, mongo_uri=mongo_uri, db_name=db_name))
        self.mongo_uri = mongo_uri
        self.db_name = db_name


class ConfigurationError(MdbTypedError):
    """A setting is missing or out of range."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message, _with_fields(context, config_key=config_key, config_value=config_value)
        )
        self.config_key = config_key
        self.config_value = config_value


class ManifestValidationError(MdbTypedError):
    """
    A stretch catalog manifest cannot be turned into seed data.

    ``error_paths`` point into the manifest, e.g.
    ``"regions.neck.stretches[2].description"``.
    """

    def __init__(
        self,
        message: str,
        error_paths: list[str] | None = None,
        manifest_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            _with_fields(context, error_paths=error_paths or None, manifest_path=manifest_path),
        )
        self.error_paths = error_paths or []
        self.manifest_path = manifest_path
