"""Generator constants and environment overrides.

Everything the templates and the analysis pass treat as a convention
lives here, so the rest of the package never hard-codes names.
"""

from __future__ import annotations

import os
from pathlib import Path

TEMPLATE_DIR = Path(__file__).parent / "templates"

BANNER = "GENERATED by servicegen"

# Kotlin package holding ServiceManager, RemoteAgent, HttpMethod, RequestHook
RUNTIME_PACKAGE = os.environ.get("SERVICEGEN_RUNTIME_PACKAGE", "io.servicegen.remote")

# Default target platform for the CLI when neither --platform nor the dump name one
DEFAULT_PLATFORM = os.environ.get("SERVICEGEN_PLATFORM", "JVM")

# Class-level marker selecting declarations for generation
SERVICE_MARKER = "RemoteService"
SERVICE_PREFIX = "I"
SERVICE_SUFFIX = "Service"
DECLARATION_KINDS = frozenset({"class", "interface"})

# Return types starting with this are paged/tabulated server data
TABULAR_PREFIX = "RemoteData"
RECEIVE_CHANNEL = "ReceiveChannel"
SEND_CHANNEL = "SendChannel"

# Names in these namespaces are default-imported by Kotlin
BUILTIN_NAMESPACES: tuple[str, ...] = ("kotlin.collections.", "kotlin.")

SOURCES_DIR = "src"
BUILD_DIR = "build"
GENERATED_DIR = "generated-src"
COMMON_DIR = "common"
CLIENT_DIR = "frontend"
FILE_EXTENSION = ".kt"

# Static allow-list: platform name -> supported
PLATFORMS: dict[str, bool] = {
    "JVM": True,
    "JS": False,
    "Native": False,
}
