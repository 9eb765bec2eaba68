from .jose_jwt_service import JoseJwtService
from .settings_auth_service import SettingsAuthService

__all__ = [
    "JoseJwtService",
    "SettingsAuthService",
]
