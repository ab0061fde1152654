"""
HTTP routes for the council site.

Routers are split so the app can include them in a fixed order: the API and
admin routers first, the static catch-all last.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from council_site.auth import require_admin_api, require_admin_page
from council_site.config import Settings, get_settings
from council_site.contact import ContactSubmission, build_contact_message
from council_site.dependencies import get_mailer, get_news_store, get_storage_client
from council_site.documents import (
    cache_bust_token,
    classify_upload,
    object_path,
    versioned_url,
)
from council_site.mailer import Mailer
from council_site.news import NewsStore
from council_site.schemas import (
    ContactResponse,
    CreateNewsResponse,
    DocumentUrlResponse,
    NewsItemModel,
    UploadResponse,
)
from council_site.storage import StorageClient

logger = logging.getLogger(__name__)

api_router = APIRouter()
admin_router = APIRouter()
site_router = APIRouter()


async def _read_payload(request: Request) -> dict:
    """Accept either a JSON object or a form-encoded body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        return data if isinstance(data, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _serve_document(directory: str, name: str) -> FileResponse:
    path = Path(directory).resolve() / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Page not found")
    return FileResponse(path)


# --- Public API -------------------------------------------------------------


@api_router.post("/contact", response_model=ContactResponse)
async def submit_contact(
    request: Request,
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    payload = await _read_payload(request)
    submission = ContactSubmission.from_payload(payload)
    if submission is None:
        raise HTTPException(status_code=400, detail="All fields are required")

    try:
        message = build_contact_message(submission, settings, mailer.sender_address)
        await mailer.send(message)
    except Exception:
        logger.exception("Failed to relay contact message")
        raise HTTPException(
            status_code=500, detail="Failed to send message. Try again later."
        )
    logger.info("Relayed contact message from student %s", submission.student_id)
    return ContactResponse(message="Message sent successfully!")


@api_router.get("/documents/{doc}", response_model=DocumentUrlResponse)
def resolve_document(
    doc: str,
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    path = object_path(doc, settings.documents_prefix)
    if path is None:
        raise HTTPException(status_code=404, detail="Document not found")
    url = versioned_url(storage.public_url(path), cache_bust_token())
    return DocumentUrlResponse(url=url)


@api_router.get("/news", response_model=list[NewsItemModel])
def list_news(store: NewsStore = Depends(get_news_store)):
    return [NewsItemModel(**item.to_dict()) for item in store.list()]


# --- Admin ------------------------------------------------------------------


@admin_router.get("", dependencies=[Depends(require_admin_page)])
@admin_router.get("/upload", dependencies=[Depends(require_admin_page)])
def admin_page(settings: Settings = Depends(get_settings)):
    return _serve_document(settings.templates_dir, settings.admin_document)


@admin_router.post(
    "/upload",
    response_model=UploadResponse,
    dependencies=[Depends(require_admin_api)],
)
async def upload_document(
    pdf: Optional[UploadFile] = File(None),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    if pdf is None or not pdf.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if pdf.size is not None and pdf.size > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")
    data = await pdf.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    doc = classify_upload(pdf.filename)
    if doc is None:
        raise HTTPException(
            status_code=400,
            detail="Filename must mention the handbook or the constitution",
        )

    path = object_path(doc, settings.documents_prefix)
    try:
        await run_in_threadpool(storage.upload_bytes, path, data, "application/pdf")
    except Exception:
        logger.exception("Failed to upload %s to %s", pdf.filename, path)
        raise HTTPException(status_code=500, detail="Upload failed")

    version = cache_bust_token()
    logger.info("Replaced %s with %s (%d bytes)", doc, pdf.filename, len(data))
    return UploadResponse(
        message=f"Uploaded {doc} successfully",
        url=versioned_url(storage.public_url(path), version),
        version=version,
    )


@admin_router.post(
    "/news",
    response_model=CreateNewsResponse,
    dependencies=[Depends(require_admin_api)],
)
async def create_news(
    request: Request,
    store: NewsStore = Depends(get_news_store),
):
    payload = await _read_payload(request)
    title = payload.get("title")
    content = payload.get("content")
    teaser = payload.get("teaser")
    if not isinstance(title, str) or not isinstance(content, str):
        raise HTTPException(status_code=400, detail="Title and content are required")
    if not isinstance(teaser, str):
        teaser = None

    try:
        item = store.create(title.strip(), content, teaser and teaser.strip())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    logger.info("Posted news item %d", item.id)
    return CreateNewsResponse(
        message="News item posted", item=NewsItemModel(**item.to_dict())
    )


# --- Static site (must be included last) ------------------------------------


@site_router.get("/", include_in_schema=False)
def root_document(settings: Settings = Depends(get_settings)):
    return _serve_document(settings.public_dir, settings.index_document)


@site_router.get("/{full_path:path}", include_in_schema=False)
def static_or_root(full_path: str, settings: Settings = Depends(get_settings)):
    public_dir = Path(settings.public_dir).resolve()
    candidate = (public_dir / full_path).resolve()
    if (
        candidate.is_relative_to(public_dir)
        and candidate.is_file()
        and candidate.name != settings.admin_document
    ):
        return FileResponse(candidate)
    return _serve_document(settings.public_dir, settings.index_document)
