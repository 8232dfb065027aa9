from __future__ import annotations

"""
Puerta de rol Viewer/Admin.

Se compara un secreto compartido en texto plano, sin hashing, sin límite de
intentos ni caducidad. Es una comodidad de interfaz: quien lea el código o el
almacén local puede saltársela.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final

from cinelaunch import config
from cinelaunch import logger as _logger
from cinelaunch.app_state import AppState
from cinelaunch.errors import PermissionDeniedError

WRONG_SECRET_MESSAGE: Final[str] = "Código de administrador incorrecto."


class Role(str, Enum):
    VIEWER = "Viewer"
    ADMIN = "Admin"


@dataclass(frozen=True, slots=True)
class GateResult:
    ok: bool
    role: Role
    message: str = ""


class RoleGate:
    def __init__(self, state: AppState, secret: str | None = None) -> None:
        self.state = state
        self._secret = config.ADMIN_SECRET if secret is None else secret

    @property
    def role(self) -> Role:
        return Role.ADMIN if self.state.is_admin else Role.VIEWER

    @property
    def is_admin(self) -> bool:
        return self.state.is_admin

    def verify(self, secret: str) -> GateResult:
        """
        Con el secreto correcto alterna el rol (Viewer ↔ Admin) y lo persiste.
        Con cualquier otro texto el rol no cambia y se devuelve el mensaje de error.
        """
        if secret != self._secret:
            _logger.warning("Intento de cambio de rol con secreto incorrecto")
            return GateResult(ok=False, role=self.role, message=WRONG_SECRET_MESSAGE)

        new_value = not self.state.is_admin
        if not self.state.set_admin(new_value):
            _logger.warning("No se pudo persistir el modo admin; vale solo para esta sesión")

        role = self.role
        _logger.info(f"Rol cambiado a {role.value}")
        return GateResult(ok=True, role=role, message=f"Modo {role.value} activado.")

    def require_admin(self) -> None:
        if not self.state.is_admin:
            raise PermissionDeniedError("Operación reservada al modo Admin.")
