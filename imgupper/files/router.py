from fastapi import APIRouter, Depends, UploadFile

from imgupper.core.dependencies import AppSettings, CurrentIdentity, DbSession, Storage, require_bearer
from imgupper.core.exceptions import ValidationError
from imgupper.files import service as file_service
from imgupper.files.schemas import FileResponse

router = APIRouter(prefix="/object", tags=["objects"], dependencies=[Depends(require_bearer)])


@router.post("/upload", response_model=FileResponse, status_code=201)
async def upload_object(
    file: UploadFile,
    identity: CurrentIdentity,
    db: DbSession,
    storage: Storage,
    settings: AppSettings,
) -> FileResponse:
    size = file.size or 0
    if size > settings.max_upload_bytes:
        raise ValidationError("file exceeds maximum upload size")

    record = await file_service.upload_file(
        db,
        storage,
        user_id=identity.user_id,
        stream=file.file,
        filename=file.filename or "",
        size=size,
        content_type=file.content_type or "application/octet-stream",
        public_base_url=settings.public_base_url,
    )
    return FileResponse.model_validate(record)


@router.get("/mine", response_model=list[FileResponse])
async def list_my_objects(identity: CurrentIdentity, db: DbSession) -> list[FileResponse]:
    records = await file_service.list_files_for_user(db, identity.user_id)
    return [FileResponse.model_validate(r) for r in records]


@router.get("/{file_id}", response_model=FileResponse)
async def get_object(file_id: int, db: DbSession) -> FileResponse:
    return FileResponse.model_validate(await file_service.get_file(db, file_id))
