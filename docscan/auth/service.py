
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from docscan.config import settings
from docscan.credits.ledger import today_utc
from docscan.errors import DuplicateUsername, InvalidCredentials, StorageError, ValidationError
from docscan.models.user import User
from docscan.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger("docscan.auth")

def register_user(db: Session, username: str, password: str) -> User:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("Username and password required")
    if db.query(User).filter(User.username == username).first():
        raise DuplicateUsername()
    user = User(
        username=username,
        password_hash=hash_password(password),
        role="user",
        credits=settings.daily_credits,
        last_reset=today_utc(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration of the same name
        db.rollback()
        raise DuplicateUsername()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("failed to store user %r", username)
        raise StorageError("Failed to register user")
    db.refresh(user)
    logger.info("registered user %s (%r)", user.id, user.username)
    return user

def authenticate_user(db: Session, username: str, password: str) -> User:
    user = db.query(User).filter(User.username == (username or "").strip()).first()
    if not user or not verify_password(password or "", user.password_hash):
        logger.info("failed login for %r", username)
        raise InvalidCredentials()
    return user

def login_user(db: Session, username: str, password: str) -> tuple[User, str]:
    user = authenticate_user(db, username, password)
    return user, create_access_token(str(user.id), user.role)

def ensure_default_admin(db: Session) -> User | None:
    """Create the configured admin account when no admin exists yet."""
    if db.query(User).filter(User.role == "admin").first():
        return None
    admin = User(
        username=settings.admin_username,
        password_hash=hash_password(settings.admin_password),
        role="admin",
        credits=settings.admin_credits,
        last_reset=today_utc(),
    )
    db.add(admin); db.commit(); db.refresh(admin)
    logger.info("default admin account created (username: %s)", admin.username)
    return admin
