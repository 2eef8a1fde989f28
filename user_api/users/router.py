from fastapi import APIRouter, File, Form, UploadFile

from user_api.core.dependencies import AppSettings, DbSession, Storage
from user_api.core.exceptions import MissingFileError
from user_api.users import service
from user_api.users.schemas import (
    CreateUserRequest,
    CreateUserResponse,
    DeleteUserRequest,
    EditUserRequest,
    MessageResponse,
    UploadImageResponse,
    UserSummary,
)

router = APIRouter(prefix="/user", tags=["users"])


@router.post("/create", response_model=CreateUserResponse, status_code=201)
async def create_user(
    body: CreateUserRequest, db: DbSession, settings: AppSettings
) -> CreateUserResponse:
    user = await service.create_user(
        db,
        full_name=body.full_name,
        email=body.email,
        password=body.password,
        mode=settings.validation_mode,
    )
    return CreateUserResponse(message="User created", user_id=user.id)


@router.put("/edit", response_model=MessageResponse)
async def edit_user(
    body: EditUserRequest, db: DbSession, settings: AppSettings
) -> MessageResponse:
    await service.edit_user(
        db,
        email=body.email,
        full_name=body.full_name,
        password=body.password,
        mode=settings.validation_mode,
    )
    return MessageResponse(message="User updated successfully")


@router.delete("/delete", response_model=MessageResponse)
async def delete_user(body: DeleteUserRequest, db: DbSession) -> MessageResponse:
    await service.delete_user(db, body.email)
    return MessageResponse(message="User deleted")


@router.get("/getAll", response_model=list[UserSummary], response_model_exclude_none=True)
async def get_all_users(db: DbSession, settings: AppSettings) -> list[UserSummary]:
    users = await service.list_users(db)
    return [
        UserSummary(
            id=u.id,
            full_name=u.full_name,
            email=u.email,
            password=u.hashed_password if settings.expose_password_hash else None,
        )
        for u in users
    ]


@router.post("/uploadImage", response_model=UploadImageResponse)
async def upload_image(
    db: DbSession,
    storage: Storage,
    email: str | None = Form(None),
    image: UploadFile | None = File(None),
) -> UploadImageResponse:
    if image is None or not image.filename:
        raise MissingFileError()
    path = await service.attach_image(
        db,
        storage,
        email=email,
        stream=image.file,
        content_type=image.content_type,
        original_name=image.filename,
    )
    return UploadImageResponse(message="Image uploaded successfully", path=path)
