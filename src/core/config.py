"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/transport) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "zendesk-rest"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "zendesk-rest"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "zendesk-rest"
    return Path.home() / ".config" / "zendesk-rest"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` no se tocan (se conserva lo que hubiera).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# zendesk-rest user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZENDESK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    subdomain: str | None = Field(
        default=None,
        description="Subdominio de la cuenta (p.ej. 'acme' para acme.zendesk.com).",
    )
    remote_uri: str | None = Field(
        default=None,
        description="Endpoint completo de la API; tiene prioridad sobre `subdomain`.",
    )

    username: str | None = Field(
        default=None,
        description="Email del agente (Basic auth con token o password).",
    )
    token: str | None = Field(
        default=None,
        description="API token del admin center.",
    )
    password: str | None = Field(
        default=None,
        description="Password del agente (solo si no hay token).",
    )
    oauth_token: str | None = Field(
        default=None,
        description="Access token OAuth (Bearer); tiene prioridad sobre el resto.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="zendesk-rest/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Reintentos ante 429/503. 0 = sin reintentos.",
    )
    retry_after_default_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Espera usada cuando la respuesta no trae Retry-After.",
    )
    max_pages: int | None = Field(
        default=None,
        ge=1,
        description="Límite por defecto de páginas en listados (None = todas).",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de log (loguru): DEBUG, INFO, WARNING, ERROR.",
    )

    def endpoint_uri(self) -> str | None:
        """Base URL de la API REST (sin barra final)."""

        if self.remote_uri:
            return self.remote_uri.rstrip("/")
        if self.subdomain:
            return f"https://{self.subdomain}.zendesk.com/api/v2"
        return None
