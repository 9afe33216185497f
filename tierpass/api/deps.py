import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.api.auth_utils import decode_access_token
from tierpass.app_shell.config import Settings
from tierpass.rules.loader import load_rules
from tierpass.rules.models import Rules
from tierpass.services.platform import TierPassService, create_service

logger = logging.getLogger(__name__)


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Service ---
# One store per process; the store serializes operations on its connection.
_service_instance: TierPassService | None = None


def get_service(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> TierPassService:
    """Get service singleton, creating the database on first use."""
    global _service_instance
    if _service_instance is None:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        store = SQLiteStore(settings.db_path)
        _service_instance = create_service(store, rules)
        logger.info("Service ready on %s", settings.db_path)
    return _service_instance


def reset_service() -> None:
    """Close and drop the service singleton."""
    global _service_instance
    if _service_instance is not None:
        _service_instance.store.close()
        _service_instance = None


# --- Auth ---
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Caller identity taken from the bearer token subject."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = payload.get("sub")
    if not identity or not isinstance(identity, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return identity
