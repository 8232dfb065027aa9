from __future__ import annotations


class CineLaunchError(Exception):
    """Base de los errores propios del catálogo."""


class ValidationError(CineLaunchError):
    """Entrada de usuario rechazada; el mensaje se muestra tal cual en la UI."""


class EntryFormatError(CineLaunchError):
    """Un payload (almacenamiento o remoto) no tiene forma de Entry válida."""


class PermissionDeniedError(CineLaunchError):
    """Operación de escritura intentada en modo Viewer."""
