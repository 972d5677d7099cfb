"""
User Service — FastAPI エントリーポイント

ユーザーの登録と参照を提供する。
Order Service は GET /users/{id} でユーザーの存在を確認する。
"""

import logging
import os

from fastapi import Depends, FastAPI

from services.common.envelope import ok
from services.common.errors import BadRequestError, install_error_handlers
from services.common.middleware import configure_logging, install_middleware

from .models import CreateUserRequest, User
from .repository import UserRepository

PORT = int(os.environ.get("USER_SERVICE_PORT", "8081"))

logger = logging.getLogger(__name__)

user_repo = UserRepository()


def get_repository() -> UserRepository:
    return user_repo


app = FastAPI(title="User Service")
install_middleware(app)
install_error_handlers(app)


@app.post("/users", status_code=201)
async def create_user(req: CreateUserRequest, repo: UserRepository = Depends(get_repository)):
    """ユーザー登録"""
    name = req.name.strip()
    email = req.email.strip().lower()
    if len(name) < 2 or "@" not in email:
        raise BadRequestError("Name (min 2 characters) and a valid email are required")

    user = User(name=name, email=email)
    repo.create(user)
    logger.info("User %s registered", user.id)
    return ok(user, message="User created successfully", status_code=201)


@app.get("/users")
async def list_users(repo: UserRepository = Depends(get_repository)):
    return ok(repo.list_all())


@app.get("/users/{user_id}")
async def get_user(user_id: str, repo: UserRepository = Depends(get_repository)):
    return ok(repo.get_by_id(user_id))


@app.get("/health")
async def health():
    return ok(
        {"service": "user-service", "status": "UP"},
        message="User service is healthy",
    )


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    logger.info("User Service starting on port %d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
