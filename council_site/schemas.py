"""
Pydantic schemas for the council site API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class NewsItemModel(BaseModel):
    id: int
    title: str
    teaser: str
    content: str
    date: str


class ContactResponse(BaseModel):
    success: Literal[True] = True
    message: str


class DocumentUrlResponse(BaseModel):
    success: Literal[True] = True
    url: str


class UploadResponse(BaseModel):
    success: Literal[True] = True
    message: str
    url: str
    version: Optional[str] = None


class CreateNewsResponse(BaseModel):
    success: Literal[True] = True
    message: str
    item: NewsItemModel
