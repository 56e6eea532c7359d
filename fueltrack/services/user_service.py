from sqlalchemy.orm import Session

from fueltrack.models.user import User, RoleName
from fueltrack.schemas.user import UserCreateRequest, UserUpdateRequest
from fueltrack.services.auth_service import serialize_user
from fueltrack.utils.security import hash_password
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import isoformat
from fueltrack.utils.exceptions import NotFoundException, DuplicateEntryException, ForbiddenException


def _serialize(u: User) -> dict:
    return {
        **serialize_user(u),
        "createdAt": isoformat(u.createdAt),
        "updatedAt": isoformat(u.updatedAt),
    }


class UserService:

    def list_users(self, db: Session, page: int, limit: int, search: str | None) -> tuple[list[dict], int]:
        q = db.query(User)
        if search:
            q = q.filter(User.username.ilike(f"%{search}%"))
        total = q.count()
        users = q.order_by(User.username.asc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(u) for u in users], total

    def get_user(self, db: Session, user_id: int) -> dict:
        u = db.query(User).filter(User.id == user_id).first()
        if not u:
            raise NotFoundException("User")
        return _serialize(u)

    def create_user(self, db: Session, data: UserCreateRequest, actor_id: int) -> dict:
        if db.query(User).filter(User.username == data.username).first():
            raise DuplicateEntryException("Username already exists", field="username")

        u = User(
            username=data.username,
            password=hash_password(data.password),
            role=data.role,
            isActive=True,
        )
        db.add(u)
        db.flush()
        log_action(db, actor_id, "CREATE", "User", u.id, f"Created user {u.username} ({u.role.value})")
        db.commit()
        db.refresh(u)
        return _serialize(u)

    def update_user(self, db: Session, user_id: int, data: UserUpdateRequest, actor_id: int) -> dict:
        u = db.query(User).filter(User.id == user_id).first()
        if not u:
            raise NotFoundException("User")

        if data.username and data.username != u.username:
            if db.query(User).filter(User.username == data.username).first():
                raise DuplicateEntryException("Username already exists", field="username")
            u.username = data.username
        if data.password:
            u.password = hash_password(data.password)
        if data.role is not None:
            if u.id == actor_id and data.role != RoleName.ADMIN:
                raise ForbiddenException("You cannot remove your own admin role")
            u.role = data.role
        if data.isActive is not None:
            if u.id == actor_id and not data.isActive:
                raise ForbiddenException("You cannot deactivate your own account")
            u.isActive = data.isActive

        log_action(db, actor_id, "UPDATE", "User", u.id, f"Updated user {u.username}")
        db.commit()
        db.refresh(u)
        return _serialize(u)

    def delete_user(self, db: Session, user_id: int, actor_id: int) -> None:
        u = db.query(User).filter(User.id == user_id).first()
        if not u:
            raise NotFoundException("User")
        if u.id == actor_id:
            raise ForbiddenException("You cannot delete your own account")

        log_action(db, actor_id, "DELETE", "User", u.id, f"Deleted user {u.username}")
        db.delete(u)
        db.commit()


user_service = UserService()
