"""
AutoStudio - Settings Models
System-wide configuration and WordPress credentials
"""
from dataclasses import dataclass


@dataclass
class SystemConfig:
    """Admin-controlled system settings"""

    is_private_mode: bool = True
    # Compared directly against the admin gate input, not a real hash
    admin_password_hash: str = 'admin123'
    default_niche: str = ''

    def to_dict(self, include_secret: bool = True) -> dict:
        data = {
            "isPrivateMode": self.is_private_mode,
            "defaultNiche": self.default_niche
        }
        if include_secret:
            data["adminPasswordHash"] = self.admin_password_hash
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SystemConfig":
        defaults = cls()
        return cls(
            is_private_mode=bool(data.get('isPrivateMode', defaults.is_private_mode)),
            admin_password_hash=str(data.get('adminPasswordHash', defaults.admin_password_hash)),
            default_niche=str(data.get('defaultNiche', defaults.default_niche))
        )

    def check_admin_password(self, attempt: str) -> bool:
        return bool(attempt) and attempt == self.admin_password_hash


@dataclass
class WordPressConfig:
    """WordPress site and Application Password credentials"""

    url: str = ''
    username: str = ''
    app_password: str = ''

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.app_password)

    def to_dict(self, include_secret: bool = True) -> dict:
        data = {
            "url": self.url,
            "username": self.username,
        }
        if include_secret:
            data["appPassword"] = self.app_password
        else:
            data["hasAppPassword"] = bool(self.app_password)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WordPressConfig":
        return cls(
            url=str(data.get('url') or ''),
            username=str(data.get('username') or ''),
            app_password=str(data.get('appPassword') or '')
        )
