from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class AppUser:
    """Usuario de la aplicación, enlazado a la cuenta del proveedor de identidad.

    `user_id` es el identificador (subject id) emitido por el proveedor.
    """

    user_id: str
    email: str
    name: str
    role: Role
