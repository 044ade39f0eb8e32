from sqlalchemy.orm import Session
from models.user import User
from schemas.user_schema import UserCreate


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, payload: UserCreate, commit: bool = True):
    user = User(**payload.model_dump())
    db.add(user)
    if commit:
        db.commit()
        db.refresh(user)
    else:
        db.flush()
    return user


def mark_email_verified(db: Session, email: str, commit: bool = True) -> int:
    updated = (
        db.query(User)
        .filter(User.email == email)
        .update({User.email_verified: True}, synchronize_session=False)
    )
    if commit:
        db.commit()
    return updated
