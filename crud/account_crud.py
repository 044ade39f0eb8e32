from sqlalchemy.orm import Session
from models.account import Account, CREDENTIAL_PROVIDER
from schemas.account_schema import AccountCreate


def get_account_by_provider(db: Session, provider_id: str, account_id: str):
    return (
        db.query(Account)
        .filter(Account.provider_id == provider_id, Account.account_id == account_id)
        .first()
    )


def get_credential_account(db: Session, user_id: str):
    return (
        db.query(Account)
        .filter(Account.user_id == user_id, Account.provider_id == CREDENTIAL_PROVIDER)
        .first()
    )


def create_account(db: Session, payload: AccountCreate, commit: bool = True):
    acc = Account(**payload.model_dump())
    db.add(acc)
    if commit:
        db.commit()
        db.refresh(acc)
    return acc


def update_account_tokens(db: Session, acc: Account, payload: AccountCreate):
    for k, v in payload.model_dump(exclude_none=True, exclude={"user_id", "provider_id", "account_id"}).items():
        setattr(acc, k, v)
    db.commit()
    db.refresh(acc)
    return acc


def set_password(db: Session, acc: Account, password_hash: str, commit: bool = True):
    acc.password = password_hash
    if commit:
        db.commit()
        db.refresh(acc)
    return acc
