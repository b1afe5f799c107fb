"""
File upload and access endpoints
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel

from core.config import settings
from models.upload import FileMeta, StoredFile, UploadOptions, UploadRequest
from services.file_access import FileManager
from services.storage import DiskManager
from services.uploader import FileUploader
from utils.error_handlers import handle_errors

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache
def get_disks() -> DiskManager:
    return DiskManager.from_settings(settings)


def get_uploader(disks: DiskManager = Depends(get_disks)) -> FileUploader:
    return FileUploader(settings, disks)


def get_file_manager(disks: DiskManager = Depends(get_disks)) -> FileManager:
    return _file_manager(disks)


@lru_cache
def _file_manager(disks: DiskManager) -> FileManager:
    # One manager per disk registry so its disk cache lives for the process
    return FileManager(settings, disks)


class VisibilityUpdate(BaseModel):
    """Request body for changing visibility"""
    path: str
    visibility: str
    disk: Optional[str] = None


class VisibilityResponse(BaseModel):
    path: str
    visibility: str


class OperationResult(BaseModel):
    path: str
    success: bool


@router.post("", response_model=StoredFile)
@handle_errors(fallback_message="Upload failed")
def upload_file(
    file: UploadFile = File(...),
    disk: Optional[str] = Form(None),
    visibility: Optional[str] = Form(None),
    user_id: Optional[int] = Form(None),
    uploader: FileUploader = Depends(get_uploader),
):
    """
    Upload a single file.

    - Sanitizes the client filename and classifies it by extension
    - Writes it to the requested disk under the configured path template
    - Returns the stored file metadata
    """
    options = UploadOptions(disk=disk, visibility=visibility, user_id=user_id)
    return uploader.store(UploadRequest.from_upload_file(file), options)


@router.get("/meta", response_model=FileMeta)
@handle_errors(fallback_message="Could not read file metadata")
def file_meta(
    path: str = Query(...),
    disk: Optional[str] = Query(None),
    files: FileManager = Depends(get_file_manager),
):
    """Get metadata for a stored file"""
    return files.meta(path, disk)


@router.get("/content")
@handle_errors(fallback_message="Could not read file")
def file_content(
    path: str = Query(...),
    disk: Optional[str] = Query(None),
    files: FileManager = Depends(get_file_manager),
):
    """Stream a stored file inline"""
    return files.get(path, disk)


@router.get("/download")
@handle_errors(fallback_message="Could not download file")
def download_file(
    path: str = Query(...),
    name: Optional[str] = Query(None),
    disk: Optional[str] = Query(None),
    files: FileManager = Depends(get_file_manager),
):
    """Download a stored file as an attachment"""
    return files.download(path, name, disk)


@router.get("/visibility", response_model=VisibilityResponse)
@handle_errors(fallback_message="Could not read visibility")
def get_visibility(
    path: str = Query(...),
    disk: Optional[str] = Query(None),
    files: FileManager = Depends(get_file_manager),
):
    return VisibilityResponse(path=path, visibility=files.get_visibility(path, disk))


@router.put("/visibility", response_model=OperationResult)
@handle_errors(fallback_message="Could not change visibility")
def set_visibility(
    update: VisibilityUpdate,
    files: FileManager = Depends(get_file_manager),
):
    """Change visibility; unknown values report success=false"""
    success = files.set_visibility(update.path, update.visibility, update.disk)
    return OperationResult(path=update.path, success=success)


@router.delete("", response_model=OperationResult)
@handle_errors(fallback_message="Could not delete file")
def delete_file(
    path: str = Query(...),
    missing_ok: bool = Query(False),
    disk: Optional[str] = Query(None),
    files: FileManager = Depends(get_file_manager),
):
    """Delete a stored file; 404 when it is missing unless missing_ok is set"""
    success = files.remove(path, throw_error=not missing_ok, disk=disk)
    return OperationResult(path=path, success=success)
