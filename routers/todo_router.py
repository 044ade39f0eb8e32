import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from core.database import get_db
from core.errors import error_boundary
from crud.todo_crud import list_todos, get_todo, create_todo, update_todo, delete_todo
from schemas.todo_schema import TodoCreate, TodoResponse, TodoUpdate
from core.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/todos", tags=["Todos"])


@router.get("", response_model=list[TodoResponse])
def list_all(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    with error_boundary(logger, "Failed to fetch todos"):
        return list_todos(db, user_id=current_user.id, skip=skip, limit=limit)


@router.get("/{todo_id}", response_model=TodoResponse)
def read_one(todo_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    with error_boundary(logger, "Failed to fetch todo"):
        todo = get_todo(db, current_user.id, todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo


@router.post("", response_model=TodoResponse, status_code=201)
def create(payload: TodoCreate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    with error_boundary(logger, "Failed to create todo"):
        return create_todo(db, payload, user_id=current_user.id)


@router.patch("/{todo_id}", response_model=TodoResponse)
def update(todo_id: str, payload: TodoUpdate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    with error_boundary(logger, "Failed to update todo"):
        todo = update_todo(db, current_user.id, todo_id, payload)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo


@router.delete("/{todo_id}", status_code=204)
def delete(todo_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    with error_boundary(logger, "Failed to delete todo"):
        ok = delete_todo(db, current_user.id, todo_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Todo not found")
    return None
