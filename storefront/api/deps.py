# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.services.auth_service import Identity, authenticate_customer, authenticate_admin
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService

bearer = HTTPBearer(auto_error=False)


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def get_current_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> Identity:
    return authenticate_customer(_token(credentials))


def get_current_admin(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> Identity:
    return authenticate_admin(_token(credentials))


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()
