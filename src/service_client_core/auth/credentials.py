"""Credential and setting resolution from the environment.

Token authenticators and ``ApiClient.from_env`` read their values through
:class:`CredentialResolver`, which tries sources in priority order:

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment once)
4. Default value

Example:
    ```python
    from service_client_core.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve(env_var_name="MY_API_TOKEN", required=True)
    ```

Credentials are never logged in full; only the source is.
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

from service_client_core.auth.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve credentials from multiple sources with priority ordering.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load the .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Attempted either way, never retried
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a credential, first match wins.

        Args:
            value: Explicit value. When not None all other sources are ignored.
            env_var_name: Environment variable to check (includes values
                loaded from .env).
            default: Fallback value.
            required: Raise instead of returning None when nothing matched.
            mask_in_logs: Log ``***`` instead of the resolved value.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If required and nothing matched.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_bool(self, *, env_var_name: str, default: bool = False) -> bool:
        """Resolve a boolean setting such as ``MYAPI_DEBUG=1``."""
        raw = self.resolve(env_var_name=env_var_name, mask_in_logs=False)
        if raw is None:
            return default
        return raw.strip().lower() in ("1", "true", "yes", "on")
