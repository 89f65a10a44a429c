# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import RegisterIn, LoginIn, AuthOut
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


def get_service(db: Session):
    return AuthService(db)


@router.post("/register", response_model=AuthOut)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    return get_service(db).login(payload.email, payload.password)
