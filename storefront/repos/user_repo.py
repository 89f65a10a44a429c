# storefront/repos/user_repo.py
from typing import List

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.data.models.admin_user import AdminUserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def get_users(self, user_ids) -> dict:
        if not user_ids:
            return {}
        rows = self.db.execute(
            select(UserModel).where(UserModel.id.in_(set(user_ids)))
        ).scalars().all()
        return {u.id: u for u in rows}

    def list_users(self) -> List[UserModel]:
        return list(
            self.db.execute(select(UserModel).order_by(UserModel.created_at.desc())).scalars().all()
        )

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def delete_user(self, user_id: str) -> int:
        result = self.db.execute(delete(UserModel).where(UserModel.id == user_id))
        return result.rowcount


class AdminUserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_admin(self, admin_id: str) -> AdminUserModel | None:
        return self.db.get(AdminUserModel, admin_id)

    def get_admin_by_username(self, username: str) -> AdminUserModel | None:
        return self.db.execute(
            select(AdminUserModel).where(AdminUserModel.username == username)
        ).scalar_one_or_none()

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(AdminUserModel)).scalar_one()

    def create_admin(self, admin: AdminUserModel) -> AdminUserModel:
        self.db.add(admin)
        self.db.flush()
        return admin
