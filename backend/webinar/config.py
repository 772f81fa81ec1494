"""
Application configuration resolved from the deployment environment.

Credentials reach the process in one of three ways:

- Cloud Foundry injects a ``VCAP_SERVICES`` JSON descriptor.
- Docker or Kubernetes set ``MONGO_URI`` (and friends) directly.
- A developer machine keeps them in a ``.env`` file next to the app.

``resolve_settings`` checks them in that order and returns an immutable
``Settings`` instance. Nothing else in the package reads the environment.
"""
import json
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic_settings import BaseSettings, SettingsConfigDict

from webinar.exceptions import ServiceBindingError

SERVICE_BINDING_VAR = "VCAP_SERVICES"
SERVICE_BINDING_LABEL_VAR = "SERVICE_BINDING_LABEL"
DEFAULT_SERVICE_LABEL = "mongodb"
DEFAULT_ENV_FILE = ".env"

# backend/webinar/config.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    # MongoDB
    mongo_uri: Optional[str] = None
    db_name: str = "webinar"
    collection_name: str = "registrations"

    # HTTP listener. PORT must default to 8080 or the platform
    # health check fails on deploy.
    host: str = "0.0.0.0"
    port: int = 8080

    # Static site
    static_dir: Path = PROJECT_ROOT / "public"
    success_page: str = "/registered.html"

    # Wait for the insert before answering (500 on failure) instead of
    # redirecting unconditionally.
    await_insert: bool = False

    # Logging
    log_level: str = "INFO"


def service_binding_uri(
    descriptor: str, label: str = DEFAULT_SERVICE_LABEL
) -> str:
    """
    Extract the document store URL from a ``VCAP_SERVICES`` descriptor.

    The first instance bound under ``label`` wins. Its credentials carry
    the URL as ``uri`` or, for older brokers, ``url``.

    Raises:
        ServiceBindingError: If the descriptor is not JSON or has no
            usable entry for ``label``.
    """
    try:
        services = json.loads(descriptor)
    except json.JSONDecodeError as e:
        raise ServiceBindingError(f"{SERVICE_BINDING_VAR} is not valid JSON: {e}") from e

    if not isinstance(services, dict):
        raise ServiceBindingError(f"{SERVICE_BINDING_VAR} must be a JSON object")

    instances = services.get(label)
    if not instances:
        raise ServiceBindingError(f"No '{label}' service bound in {SERVICE_BINDING_VAR}")
    if not isinstance(instances, list) or not isinstance(instances[0], dict):
        raise ServiceBindingError(f"'{label}' in {SERVICE_BINDING_VAR} must be a list of service instances")

    credentials = instances[0].get("credentials") or {}
    if not isinstance(credentials, dict):
        raise ServiceBindingError(f"'{label}' service credentials must be an object")
    uri = credentials.get("uri") or credentials.get("url")
    if not isinstance(uri, str) or not uri:
        raise ServiceBindingError(f"'{label}' service credentials have no uri or url")
    return uri


def read_env_file(path: Path) -> Optional[dict[str, str]]:
    """
    Read name/value pairs from a dotenv file.

    Returns None when the file does not exist. Any other I/O error
    propagates to the caller.
    """
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as stream:
        values = dotenv_values(stream=stream)
    # "KEY" without "=value" parses to None; there is nothing to export
    return {key: value for key, value in values.items() if value is not None}


def apply_env_file(values: Mapping[str, str]) -> None:
    """Export file values into the process environment without overriding."""
    for key, value in values.items():
        os.environ.setdefault(key, value)


def resolve_settings(env_file: os.PathLike | str = DEFAULT_ENV_FILE) -> Settings:
    """
    Resolve the application settings once at process start.

    Precedence for the connection URL:
    1. ``VCAP_SERVICES`` (Cloud Foundry); the local file is not read.
    2. Variables already present in the process environment.
    3. The optional local ``env_file``.
    """
    descriptor = os.environ.get(SERVICE_BINDING_VAR)
    if descriptor:
        label = os.environ.get(SERVICE_BINDING_LABEL_VAR, DEFAULT_SERVICE_LABEL)
        return Settings(mongo_uri=service_binding_uri(descriptor, label))

    values = read_env_file(Path(env_file))
    if values is not None:
        apply_env_file(values)
    return Settings()
