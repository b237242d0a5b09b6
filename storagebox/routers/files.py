from typing import List, Optional

from fastapi import APIRouter, Depends, File as FastAPIFile, UploadFile, status
from sqlalchemy.orm import Session

from storagebox.deps import AuthContext, get_auth_context, get_blob_store, get_db
from storagebox.models.file import File, FileCategory
from storagebox.schemas import FileRecord, FileSummary, MessageResponse, RenameRequest, RenameResponse
from storagebox.services import files as file_service
from storagebox.services.blob_store import S3BlobStore

router = APIRouter(prefix="/api/files", tags=["files"])


def _summaries(files: List[File]) -> List[FileSummary]:
    return [
        FileSummary(id=f.id, name=f.name, url=f.url, size=f.size, date=f.created_at)
        for f in files
    ]


# --- upload a new file ---
@router.post("/upload", response_model=FileRecord, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: Optional[UploadFile] = FastAPIFile(None),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
    blob_store: S3BlobStore = Depends(get_blob_store),
):
    content = file.file.read() if file is not None else None
    return file_service.upload(
        db,
        blob_store,
        auth.user_id,
        content,
        file.filename if file is not None else None,
        file.content_type if file is not None else None,
    )


# --- list by category ---
def _list_route(category: FileCategory):
    def list_category(
        page: Optional[str] = None,
        limit: Optional[str] = None,
        auth: AuthContext = Depends(get_auth_context),
        db: Session = Depends(get_db),
    ):
        return _summaries(file_service.list_files(db, auth.user_id, category, page, limit))

    list_category.__name__ = f"list_{category.name.lower()}"
    return list_category


for _path, _category in (
    ("/images", FileCategory.IMAGE),
    ("/document", FileCategory.DOCUMENT),
    ("/other", FileCategory.OTHER),
    ("/videos", FileCategory.VIDEO_OR_AUDIO),
):
    router.add_api_route(_path, _list_route(_category), methods=["GET"], response_model=List[FileSummary])


# --- rename a file ---
@router.patch("/{file_id}/rename", response_model=RenameResponse)
def rename_file(
    file_id: int,
    body: RenameRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    file = file_service.rename(db, auth.user_id, file_id, body.new_name)
    return RenameResponse(message="name changed", file=FileRecord.model_validate(file))


# --- delete a file ---
@router.delete("/{file_id}", response_model=MessageResponse)
def delete_file(
    file_id: int,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
    blob_store: S3BlobStore = Depends(get_blob_store),
):
    file_service.delete(db, blob_store, auth.user_id, file_id)
    return MessageResponse(message="File deleted successfully")
