# storefront/services/auth_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.data.models.admin_user import AdminUserModel
from storefront.data.transaction import atomic
from storefront.domain.enums import UserStatus
from storefront.domain.errors import InvalidArgument, Unauthorized, Forbidden
from storefront.domain.schemas import (
    RegisterIn,
    AuthOut,
    PublicUser,
    AdminAuthOut,
    PublicAdmin,
)
from storefront.repos.user_repo import UserRepo, AdminUserRepo
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72

CUSTOMER_SCOPE = "customer"
ADMIN_SCOPE = "admin"


@dataclass(frozen=True)
class TrustDomain:
    scope: str
    secret: str
    expiry: timedelta


@dataclass(frozen=True)
class Identity:
    """Who the bearer token belongs to."""

    scope: str
    subject_id: str
    claims: dict


def customer_domain() -> TrustDomain:
    return TrustDomain(CUSTOMER_SCOPE, settings.JWT_SECRET, timedelta(hours=settings.TOKEN_EXPIRY_HOURS))


def admin_domain() -> TrustDomain:
    return TrustDomain(ADMIN_SCOPE, settings.ADMIN_SECRET, timedelta(hours=settings.ADMIN_TOKEN_EXPIRY_HOURS))


# =====================================================
# TOKENS
# =====================================================
def issue_token(domain: TrustDomain, claims: dict, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {**claims, "scope": domain.scope, "iat": now, "exp": now + domain.expiry}
    return jwt.encode(payload, domain.secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(domain: TrustDomain, token: str | None) -> dict:
    """
    Decodes a bearer token of the given trust domain.
    Missing token -> Unauthorized; bad signature, expired or foreign scope -> Forbidden.
    """
    if not token:
        raise Unauthorized("Access token required")

    try:
        claims = jwt.decode(token, domain.secret, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Forbidden("Token expired")
    except jwt.InvalidTokenError:
        raise Forbidden("Invalid token")

    if claims.get("scope") != domain.scope:
        raise Forbidden("Invalid token")

    return claims


def authenticate_customer(token: str | None) -> Identity:
    claims = verify_token(customer_domain(), token)
    if not claims.get("userId"):
        raise Forbidden("Invalid token")
    return Identity(CUSTOMER_SCOPE, claims["userId"], claims)


def authenticate_admin(token: str | None) -> Identity:
    claims = verify_token(admin_domain(), token)
    if not claims.get("adminId"):
        raise Forbidden("Invalid token")
    return Identity(ADMIN_SCOPE, claims["adminId"], claims)


# =====================================================
# PASSWORDS
# =====================================================
def hash_password(plain: str) -> str:
    if len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidArgument(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def check_password(plain: str, hashed: str) -> bool:
    if len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


# =====================================================
# ACCOUNTS
# =====================================================
class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepo(db)
        self.admins = AdminUserRepo(db)

    def register(self, payload: RegisterIn) -> AuthOut:
        email = payload.email.lower()

        if self.users.get_user_by_email(email):
            raise InvalidArgument("Email already exists")

        password = hash_password(payload.password)

        with atomic(self.db, "Register"):
            user = self.users.create_user(
                UserModel(
                    email=email,
                    name=payload.name,
                    password=password,
                    status=UserStatus.ACTIVE.value,
                )
            )

        logger.info(f"Registered user {user.id}")
        return self._customer_auth(user)

    def login(self, email: str, password: str) -> AuthOut:
        user = self.users.get_user_by_email(email.lower())

        if not user or not check_password(password, user.password):
            logger.warning("Failed customer login")
            raise InvalidArgument("Invalid credentials")

        if user.status != UserStatus.ACTIVE.value:
            raise Forbidden("Account suspended")

        return self._customer_auth(user)

    def admin_login(self, username: str, password: str) -> AdminAuthOut:
        admin = self.admins.get_admin_by_username(username)

        if not admin or not check_password(password, admin.password):
            logger.warning(f"Failed admin login for {username}")
            raise InvalidArgument("Invalid credentials")

        token = issue_token(admin_domain(), {"adminId": admin.id, "username": admin.username})
        return AdminAuthOut(token=token, admin=PublicAdmin.model_validate(admin))

    def create_admin(self, username: str, password: str) -> AdminUserModel:
        hashed = hash_password(password)
        with atomic(self.db, "Create admin"):
            admin = self.admins.create_admin(AdminUserModel(username=username, password=hashed))
        return admin

    @staticmethod
    def _customer_auth(user: UserModel) -> AuthOut:
        token = issue_token(customer_domain(), {"userId": user.id, "email": user.email, "name": user.name})
        return AuthOut(token=token, user=PublicUser.model_validate(user))
