"""Error taxonomy for the Cinemagic engine."""

from __future__ import annotations


class CinemagicError(RuntimeError):
    """Base class for every condition the engine raises on purpose."""


class MissingCredential(CinemagicError):
    """No API key in the environment; raised before any network attempt."""


class InvalidLook(CinemagicError):
    """Lookup of a look id outside the catalog. Treat as a bug."""


class EmptyInput(CinemagicError, ValueError):
    """Prompt enhancement asked for with every scene field empty."""


class MissingReferenceImage(CinemagicError, ValueError):
    """Reference Match selected without an uploaded reference image."""


class NoImageProduced(CinemagicError):
    """The remote call succeeded but returned no inline image part."""


class RemoteCallFailed(CinemagicError):
    """Transport or model error from the remote service."""
