from datetime import datetime
from sqlalchemy.orm import Session
from models.verification import Verification
from schemas.verification_schema import VerificationCreate


def get_verification(db: Session, verification_id: str):
    return db.query(Verification).filter(Verification.id == verification_id).first()


def list_by_identifier(db: Session, identifier: str):
    return (
        db.query(Verification)
        .filter(Verification.identifier == identifier)
        .order_by(Verification.created_at)
        .all()
    )


def create_verification(db: Session, payload: VerificationCreate, commit: bool = True):
    ver = Verification(**payload.model_dump())
    db.add(ver)
    if commit:
        db.commit()
        db.refresh(ver)
    return ver


def delete_verification(db: Session, verification_id: str) -> bool:
    ver = get_verification(db, verification_id)
    if not ver:
        return False
    db.delete(ver)
    db.commit()
    return True


def delete_by_identifier(db: Session, identifier: str, commit: bool = True) -> int:
    deleted = (
        db.query(Verification)
        .filter(Verification.identifier == identifier)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return deleted


def get_valid(db: Session, identifier: str, value: str, now: datetime):
    """Return the matching row only if it has not expired yet."""
    return (
        db.query(Verification)
        .filter(
            Verification.identifier == identifier,
            Verification.value == value,
            Verification.expires_at > now,
        )
        .first()
    )


def get_valid_by_identifier(db: Session, identifier: str, now: datetime):
    return (
        db.query(Verification)
        .filter(Verification.identifier == identifier, Verification.expires_at > now)
        .first()
    )


def delete_expired(db: Session, now: datetime) -> int:
    deleted = (
        db.query(Verification)
        .filter(Verification.expires_at <= now)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
