"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str


@dataclass
class KubernetesConfig:
    """Kubernetes client and membership query configuration."""
    kubeconfig: str
    context: Optional[str]
    namespace: str
    label_key: str


@dataclass
class RefreshConfig:
    """Refresh broadcast configuration."""
    default_application: str
    target_port: int
    target_path: str
    timeout_seconds: float
    max_concurrency: int


@dataclass
class AuthConfig:
    """Authentication configuration."""
    require_auth: bool
    api_keys: List[str]


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_kubernetes_config(self) -> KubernetesConfig:
        """Get Kubernetes configuration."""
        ...

    def get_refresh_config(self) -> RefreshConfig:
        """Get refresh broadcast configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        # HTTP_PORT is the name the worker deployments already use
        port_env = "API_PORT" if os.getenv("API_PORT") else "HTTP_PORT"
        return APIConfig(
            port=_env_int(port_env, "8080"),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=_env_bool("API_DEBUG", "false"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def get_kubernetes_config(self) -> KubernetesConfig:
        """Get Kubernetes configuration from environment variables."""
        kubeconfig = os.getenv("KUBECONFIG") or os.path.join(
            os.path.expanduser("~"), ".kube", "config"
        )
        return KubernetesConfig(
            kubeconfig=kubeconfig,
            context=os.getenv("KUBE_CONTEXT") or None,
            namespace=os.getenv("KUBE_NAMESPACE", "default"),
            label_key=os.getenv("MEMBER_LABEL_KEY", "app"),
        )

    def get_refresh_config(self) -> RefreshConfig:
        """Get refresh broadcast configuration from environment variables."""
        max_concurrency = _env_int("REFRESH_MAX_CONCURRENCY", "10")
        if max_concurrency < 1:
            raise ValueError("REFRESH_MAX_CONCURRENCY must be at least 1")

        path = os.getenv("REFRESH_PATH", "/refresh-config")
        if not path.startswith("/"):
            path = "/" + path

        return RefreshConfig(
            default_application=os.getenv("DEFAULT_APP_NAME", "producer"),
            target_port=_env_int("REFRESH_PORT", "8081"),
            target_path=path,
            timeout_seconds=_env_float("REFRESH_TIMEOUT", "5.0"),
            max_concurrency=max_concurrency,
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        require_auth = _env_bool("REQUIRE_AUTH", "true")
        api_keys_env = os.getenv("API_KEYS", "")
        api_keys = [key.strip() for key in api_keys_env.split(",") if key.strip()]

        if require_auth and not api_keys:
            raise ValueError(
                "API_KEYS environment variable is required when REQUIRE_AUTH is enabled "
                "(format: key or service:key, comma separated). "
                "Set REQUIRE_AUTH=false to disable authentication."
            )

        return AuthConfig(require_auth=require_auth, api_keys=api_keys)
