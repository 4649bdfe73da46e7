# storefront/repos/user_repo.py
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.user import AdminUserModel, UserModel
from storefront.data.models.user_session import UserSessionModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active_session(self, token_hash: str, now: datetime) -> UserSessionModel | None:
        return self.db.execute(
            select(UserSessionModel).where(
                UserSessionModel.token_hash == token_hash,
                UserSessionModel.expires_at > now,
            )
        ).scalar_one_or_none()

    def get_active_user(self, user_id: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.user_id == user_id, UserModel.is_active.is_(True))
        ).scalar_one_or_none()

    def get_active_admin(self, admin_id: str) -> AdminUserModel | None:
        return self.db.execute(
            select(AdminUserModel).where(
                AdminUserModel.admin_id == admin_id,
                AdminUserModel.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def get_address(self, address_id: str) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)
