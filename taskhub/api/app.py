"""FastAPI web application for taskhub."""

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from taskhub.api.dependencies import get_task_or_404, get_user_or_404
from taskhub.api.schemas import BulkDeleteRequest, BulkTasksRequest, TaskPayload, UserPayload
from taskhub.database.database import get_db, init_db
from taskhub.database.repository import TaskRepository
from taskhub.database.user_repository import UserRepository
from taskhub.engine import bulk_delete, bulk_store, bulk_update
from taskhub.errors import BusinessRuleError, NotFoundError, TaskHubError, ValidationError
from taskhub.models.constants import EXISTED_EMAIL, EXISTED_EMAIL_MESSAGE, INVALID_DATA
from taskhub.models.task import Task
from taskhub.models.user import User
from taskhub.validation import (
    TASK_CREATE_RULES,
    TASK_UPDATE_RULES,
    USER_CREATE_RULES,
    USER_UPDATE_RULES,
    validate,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="taskhub API",
    description="Users and their tasks, with bulk task operations per user",
    version=API_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    logger.debug(f"{request.method} {request.url.path}: {exc}")
    return Response(status_code=404)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"code": exc.code, "error": exc.messages})


@app.exception_handler(BusinessRuleError)
async def business_rule_handler(request: Request, exc: BusinessRuleError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"code": exc.code, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content={"code": INVALID_DATA, "error": messages})


def _unexpected_error(code: str, exc: Exception) -> JSONResponse:
    """Build the response for an error nothing else handled."""
    logger.exception(f"{code}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(status_code=500, content={"code": code, "error": str(exc)})


def _require_valid(record: dict, rules, db: Session) -> None:
    result = validate(record, rules, db)
    if not result.is_valid:
        raise ValidationError(result.errors)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": API_VERSION}


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

@app.get("/tasks", response_model=List[Task])
def list_tasks(db: Session = Depends(get_db)):
    """List all tasks."""
    return TaskRepository(db).get_all()


@app.post("/tasks", status_code=201)
def create_task(payload: TaskPayload, db: Session = Depends(get_db)):
    """Create a single task."""
    fields = payload.model_dump(exclude_unset=True)
    try:
        _require_valid(fields, TASK_CREATE_RULES, db)
        task = TaskRepository(db).create(fields)
        return {"code": "created_task", "task": task}
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("not_created_task", e)


@app.get("/tasks/list", response_model=List[Task])
def list_user_tasks(user_id: Optional[str] = Query(None, alias="userId"), db: Session = Depends(get_db)):
    """List the tasks of a user; unknown or missing users yield an empty list."""
    if not user_id:
        return []
    try:
        if not UserRepository(db).exists(user_id):
            return []
        return TaskRepository(db).get_for_user(user_id)
    except Exception as e:
        return _unexpected_error("error_tasks_list", e)


@app.get("/tasks/{task_id}", response_model=Task)
def get_task(task: Task = Depends(get_task_or_404)):
    """Get one task."""
    return task


@app.put("/tasks/{task_id}")
def update_task(payload: TaskPayload, task: Task = Depends(get_task_or_404), db: Session = Depends(get_db)):
    """Update one task with the supplied fields."""
    fields = payload.model_dump(exclude_unset=True)
    try:
        _require_valid(fields, TASK_UPDATE_RULES, db)
        updated = TaskRepository(db).update(task.id, fields)
        return {"code": "updated_task", "task": updated}
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("not_updated_task", e)


@app.delete("/tasks/{task_id}")
def delete_task(task: Task = Depends(get_task_or_404), db: Session = Depends(get_db)):
    """Delete one task."""
    deleted = TaskRepository(db).delete(task.id)
    return {"code": "deleted_task", "task": deleted}


# ---------------------------------------------------------------------------
# Bulk task operations for a user
# ---------------------------------------------------------------------------

@app.post("/users/{user_id}/tasks", response_model=List[Task])
def store_user_tasks(body: BulkTasksRequest, user: User = Depends(get_user_or_404), db: Session = Depends(get_db)):
    """Create many tasks for a user; any invalid task aborts the whole batch."""
    try:
        return bulk_store(db, user.id, body.payloads())
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("error_store_tasks", e)


@app.put("/users/{user_id}/tasks")
def update_user_tasks(body: BulkTasksRequest, user: User = Depends(get_user_or_404), db: Session = Depends(get_db)):
    """Update many tasks of a user; tasks the user does not own are skipped."""
    try:
        return bulk_update(db, user.id, body.payloads()).kept
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("error_update_tasks", e)


@app.post("/users/{user_id}/deleteTasks")
def delete_user_tasks(body: BulkDeleteRequest, user: User = Depends(get_user_or_404), db: Session = Depends(get_db)):
    """Delete many tasks of a user; ids the user does not own are ignored."""
    try:
        result = bulk_delete(db, user.id, body.tasks)
        return {"code": "deleted_tasks", "tasks": result.requested}
    except Exception as e:
        return _unexpected_error("error_delete_tasks", e)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@app.get("/users", response_model=List[User])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return UserRepository(db).get_all()


@app.post("/users", status_code=201)
def create_user(payload: UserPayload, db: Session = Depends(get_db)):
    """Create a user."""
    fields = payload.model_dump(exclude_unset=True)
    try:
        _require_valid(fields, USER_CREATE_RULES, db)
        user = UserRepository(db).create(fields)
        return {"code": "created_user", "user": user}
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("not_created_user", e)


@app.get("/users/{user_id}", response_model=User)
def get_user(user: User = Depends(get_user_or_404)):
    """Get one user."""
    return user


@app.put("/users/{user_id}")
def update_user(payload: UserPayload, user: User = Depends(get_user_or_404), db: Session = Depends(get_db)):
    """Update a user with the supplied fields; the email must stay unique."""
    fields = payload.model_dump(exclude_unset=True)
    try:
        _require_valid(fields, USER_UPDATE_RULES, db)
        repository = UserRepository(db)
        if fields.get("email") and repository.email_taken(fields["email"], exclude_id=user.id):
            raise BusinessRuleError(EXISTED_EMAIL, EXISTED_EMAIL_MESSAGE)
        updated = repository.update(user.id, fields)
        return {"code": "updated_user", "user": updated}
    except TaskHubError:
        raise
    except Exception as e:
        return _unexpected_error("not_updated_user", e)


@app.delete("/users/{user_id}")
def delete_user(user: User = Depends(get_user_or_404), db: Session = Depends(get_db)):
    """Delete a user and their tasks."""
    deleted = UserRepository(db).delete(user.id)
    return {"code": "deleted_user", "user": deleted}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
