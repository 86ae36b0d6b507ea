"""HTTP routes for documents.

    POST   /files/upload          save a batch of text files
    GET    /files                 list metadata of every file
    GET    /files/{search}        metadata of files whose content contains the term
                                  (the term may contain "/"; one ending in "/content"
                                  is read as a content fetch)
    GET    /files/{id}/content    one file, content included
    DELETE /files/{id}            delete one file
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from docstore.db.deps import EngineDep

from .schemas import DeleteResponse, DocumentMetadata, DocumentOut, UploadRequest, UploadResponse
from .service import DocumentService

router = APIRouter(prefix="/files", tags=["files"])


def get_document_service(engine: EngineDep) -> DocumentService:
    return DocumentService(engine)


ServiceDep = Annotated[DocumentService, Depends(get_document_service)]


@router.post("/upload", response_model=UploadResponse)
async def upload_files(payload: UploadRequest, service: ServiceDep) -> UploadResponse:
    created = await service.upload_batch(payload.files)
    return UploadResponse(message="Files content saved!", files=created)


@router.get("", response_model=list[DocumentMetadata])
async def list_files(service: ServiceDep) -> list[DocumentMetadata]:
    return await service.list_all()


@router.get("/{file_id}/content", response_model=DocumentOut)
async def get_file(file_id: str, service: ServiceDep) -> DocumentOut:
    return await service.get_content(file_id)


# Registered after /{file_id}/content so that route wins; a term may contain "/".
@router.get("/{search:path}", response_model=list[DocumentMetadata])
async def search_files(search: str, service: ServiceDep) -> list[DocumentMetadata]:
    return await service.search(search)


@router.delete("/{file_id}", response_model=DeleteResponse)
async def delete_file(file_id: str, service: ServiceDep) -> DeleteResponse:
    deleted = await service.remove(file_id)
    return DeleteResponse(message="File deleted successfully!", deleted_file_id=deleted.id)
