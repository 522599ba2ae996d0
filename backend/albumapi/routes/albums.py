"""
Album API — Albums Route Handlers
==================================

What:  GET /albums, GET /albums/{album_id}, POST /albums.
How:   Thin handlers: resolve the AlbumService from application state and
       delegate. Errors are raised as application exceptions and rendered by
       the global handlers registered in main.py.

Status codes:
    GET  /albums       200 │ 500 backend error
    GET  /albums/{id}  200 │ 404 not found │ 500 backend error
    POST /albums       201 │ 400 malformed body │ 500 backend failure
"""

from typing import List

from fastapi import APIRouter, Depends, Request

from albumapi.schemas.album import Album, ErrorResponse, MessageResponse
from albumapi.services.album_service import AlbumService

router = APIRouter(tags=["Albums"])


def get_album_service(request: Request) -> AlbumService:
    """FastAPI dependency returning the AlbumService built by create_app()."""
    return request.app.state.album_service


@router.get(
    "/albums",
    response_model=List[Album],
    responses={500: {"description": "Backend error", "model": ErrorResponse}},
    summary="List all albums",
)
async def list_albums(service: AlbumService = Depends(get_album_service)) -> List[Album]:
    """Query parameters are ignored; an empty table yields an empty array."""
    return await service.list_albums()


@router.get(
    "/albums/{album_id}",
    response_model=Album,
    responses={
        404: {"description": "Album not found", "model": MessageResponse},
        500: {"description": "Backend error", "model": ErrorResponse},
    },
    summary="Get one album by backend record id",
)
async def get_album(
    album_id: str,
    service: AlbumService = Depends(get_album_service),
) -> Album:
    return await service.get_album(album_id)


@router.post(
    "/albums",
    status_code=201,
    response_model=Album,
    responses={
        400: {"description": "Malformed request body", "model": ErrorResponse},
        500: {"description": "Album could not be created", "model": ErrorResponse},
    },
    summary="Create an album",
)
async def create_album(
    album: Album,
    service: AlbumService = Depends(get_album_service),
) -> Album:
    """
    Create an album from the JSON body and return it as the backend stored it.

    The returned fields come from the backend's created record, so any
    transformation the backend applies is reflected in the response.
    """
    return await service.create_album(album)
