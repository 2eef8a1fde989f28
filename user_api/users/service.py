"""User account operations: validation, persistence and image attachment."""
import logging
from typing import BinaryIO

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from user_api.core.exceptions import DuplicateEmailError, NotFoundError, UnsupportedMediaTypeError
from user_api.core.security import hash_password
from user_api.users.models import User
from user_api.users.storage import ImageStorage
from user_api.users.validation import ValidationMode, validate_create, validate_edit

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str | None) -> User:
    if email:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is not None:
            return user
    raise NotFoundError("User", email)


async def create_user(
    db: AsyncSession,
    full_name: str | None,
    email: str | None,
    password: str | None,
    mode: ValidationMode = ValidationMode.STRICT,
) -> User:
    validate_create(full_name, email, password, mode=mode)

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(email)

    user = User(full_name=full_name, email=email, hashed_password=hash_password(password))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent create for the same email.
        await db.rollback()
        raise DuplicateEmailError(email) from exc
    await db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


async def edit_user(
    db: AsyncSession,
    email: str | None,
    full_name: str | None,
    password: str | None = None,
    mode: ValidationMode = ValidationMode.STRICT,
) -> User:
    validate_edit(email, full_name, password, mode=mode)

    user = await get_user_by_email(db, email)
    if full_name:
        user.full_name = full_name
    if password:
        user.hashed_password = hash_password(password)
    await db.commit()
    logger.info("Updated user %s", user.id)
    return user


async def delete_user(db: AsyncSession, email: str | None) -> None:
    """Find-and-delete in a single statement; image files on disk are left behind."""
    if not email:
        raise NotFoundError("User", email)
    result = await db.execute(delete(User).where(User.email == email))
    if result.rowcount == 0:
        raise NotFoundError("User", email)
    await db.commit()
    logger.info("Deleted user with email %s", email)


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at))
    return list(result.scalars().all())


async def attach_image(
    db: AsyncSession,
    storage: ImageStorage,
    email: str | None,
    stream: BinaryIO,
    content_type: str | None,
    original_name: str,
) -> str:
    """Store an uploaded image and record its path on the user.

    The content type is checked and the user looked up before anything is
    written. If persisting the path fails, the written file is removed again.
    """
    if not storage.accepts(content_type):
        raise UnsupportedMediaTypeError(content_type)

    user = await get_user_by_email(db, email)
    path = await run_in_threadpool(storage.store, stream, content_type, original_name)

    user.image_path = path
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        await run_in_threadpool(storage.discard, path)
        raise
    logger.info("Attached image %s to user %s", path, user.id)
    return path
