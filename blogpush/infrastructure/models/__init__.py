"""ORM models used by the application infrastructure."""

from .local_setting import LocalSettingModel

__all__ = ["LocalSettingModel"]
