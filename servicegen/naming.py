"""Naming conventions for service declarations and generated Kotlin.

Service interfaces are named ``I...Service``; generated classes and files
drop the leading ``I``:

  IWidgetService  -> WidgetService        (client class, WidgetService.kt)
                  -> WidgetServiceManager (registration object, WidgetServiceManager.kt)
  UserService     -> skipped (no leading I)
  IUser           -> skipped (no Service suffix)
"""

from __future__ import annotations

from pathlib import PurePath

from . import config

# Kotlin string escapes, applied in order
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("$", "\\$"),
)


def is_service_name(name: str) -> bool:
    """Check the ``I<Base>Service`` convention."""
    return name.startswith(config.SERVICE_PREFIX) and name.endswith(config.SERVICE_SUFFIX)


def base_name(interface_name: str) -> str:
    """Strip the leading ``I`` from an interface name."""
    return interface_name[len(config.SERVICE_PREFIX):]


def manager_name(interface_name: str) -> str:
    return f"{base_name(interface_name)}Manager"


def common_file_name(interface_name: str) -> str:
    return manager_name(interface_name) + config.FILE_EXTENSION


def client_file_name(interface_name: str) -> str:
    return base_name(interface_name) + config.FILE_EXTENSION


def package_to_path(package_name: str) -> PurePath:
    """Translate ``com.example.api`` into ``com/example/api``."""
    parts = [p for p in package_name.split(".") if p]
    return PurePath(*parts) if parts else PurePath()


def kotlin_string(value: str | None) -> str:
    """Render a Kotlin string literal, or ``null`` for a missing value."""
    if value is None:
        return "null"
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return f'"{value}"'
