"""User service encapsulating business rules."""
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from ..db.repositories.user_repo import UserRepository
from ..db.models.user import User
from ..domain.enums import Role
from ..errors import AuthenticationRequired, Conflict, NotFound, ValidationFailed


def _check_roles(roles: List[str]) -> List[str]:
    known = {r.value for r in Role}
    unknown = [r for r in roles if r not in known]
    if unknown:
        raise ValidationFailed(
            "Unknown roles", details=[{"field": "roles", "message": f"Unknown role {r}"} for r in unknown]
        )
    return list(dict.fromkeys(roles))


class UserService:
    def __init__(self, session: Session) -> None:
        self.repo = UserRepository(session)

    def list_users(self) -> Iterable[User]:
        return self.repo.list()

    def create_user(
        self,
        email: str,
        name: str | None = None,
        password: str | None = None,
        roles: List[str] | None = None,
    ) -> User:
        if self.repo.get_by_email(email):
            raise Conflict("email already exists")
        return self.repo.create(
            email=email,
            name=name,
            password_hash=generate_password_hash(password) if password else None,
            roles=_check_roles(roles or [Role.AUTHOR.value]),
        )

    def get_user(self, user_id: str) -> Optional[User]:
        return self.repo.get(user_id)

    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        roles: List[str] | None = None,
        password: str | None = None,
    ) -> Optional[User]:
        return self.repo.update(
            user_id,
            name=name,
            roles=_check_roles(roles) if roles is not None else None,
            password_hash=generate_password_hash(password) if password else None,
        )

    def delete_user(self, user_id: str, acting_user_id: str | None = None) -> bool:
        if acting_user_id is not None and user_id == acting_user_id:
            raise ValidationFailed(
                "Cannot delete yourself", details=[{"field": "user_id", "message": "Cannot delete yourself"}]
            )
        if not self.repo.delete(user_id):
            raise NotFound(f"User {user_id} not found")
        return True

    def authenticate(self, email: str, password: str) -> User:
        user = self.repo.get_by_email(email)
        if not user or not user.password_hash or not check_password_hash(user.password_hash, password):
            raise AuthenticationRequired("Invalid email or password")
        return user
