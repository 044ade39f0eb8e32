from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.todo import Todo
from schemas.todo_schema import TodoCreate, TodoUpdate


def get_todo(db: Session, user_id: str, todo_id: str):
    """Fetch a todo owned by ``user_id``; other users' todos look missing."""
    return db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == user_id).first()


def list_todos(db: Session, user_id: str, skip: int = 0, limit: int = 100):
    return (
        db.query(Todo)
        .filter(Todo.user_id == user_id)
        .order_by(desc(Todo.created_at))
        .offset(skip)
        .limit(limit)
        .all()
    )


def create_todo(db: Session, payload: TodoCreate, user_id: str):
    todo = Todo(user_id=user_id, **payload.model_dump())
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def update_todo(db: Session, user_id: str, todo_id: str, payload: TodoUpdate):
    todo = get_todo(db, user_id, todo_id)
    if not todo:
        return None
    for k, v in payload.model_dump(exclude_unset=True).items():
        # Only description is nullable
        if v is None and k != "description":
            continue
        setattr(todo, k, v)
    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(db: Session, user_id: str, todo_id: str) -> bool:
    todo = get_todo(db, user_id, todo_id)
    if not todo:
        return False
    db.delete(todo)
    db.commit()
    return True
