"""
Album API — Album Service (the Store)
======================================

What:  The three album operations: list, get by id, create.
Why:   Keeps backend calls and record mapping out of the route handlers.
How:   Each method makes exactly one TableBackend call, maps the result
       through the record mapper, and raises application exceptions that the
       global handlers in main.py turn into HTTP responses.
Who:   Called by the /albums route handlers.

Operation Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│ AlbumService │───▶│ TableBackend │───▶│ Airtable │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────┘
                           │  record_mapper (fields ⇄ Album)

    On failure:
    - list / get: BackendError propagates with the backend's error text (500)
    - get:        None from the backend becomes NotFoundError (404)
    - create:     any failure or an empty result becomes a fixed-message
                  BackendError (500); the cause is logged, not returned
"""

import logging
from typing import List

from albumapi.exceptions import BackendError, NotFoundError
from albumapi.schemas.album import Album
from albumapi.services.record_mapper import album_from_fields, fields_from_album
from albumapi.services.table_base import TableBackend

logger = logging.getLogger(__name__)

CREATE_FAILED_MESSAGE = "failed to create album"


class AlbumService:
    """
    Mediates between HTTP handlers and the table backend.

    Holds no state besides the backend handle, which is shared read-only by
    all concurrent requests.
    """

    def __init__(self, table: TableBackend):
        self.table = table

    async def list_albums(self) -> List[Album]:
        """
        Return every album the backend lists, in backend order.

        Raises:
            BackendError: The backend call failed.
        """
        records = await self.table.list_records()
        logger.debug("Listed %d album records", len(records))
        return [album_from_fields(record.fields) for record in records]

    async def get_album(self, album_id: str) -> Album:
        """
        Return the album stored under a backend record identifier.

        The identifier is passed through untouched; whether a malformed one
        is "not found" or an error is decided by the backend's answer.

        Raises:
            NotFoundError: The backend has no such record.
            BackendError: The backend call failed.
        """
        record = await self.table.get_record(album_id)
        if record is None:
            raise NotFoundError(resource="album", resource_id=album_id)
        return album_from_fields(record.fields)

    async def create_album(self, album: Album) -> Album:
        """
        Create one backend record from an album and return it as stored.

        Fields are submitted as given; the backend's own validation is the
        only gate.

        Raises:
            BackendError: With the fixed message "failed to create album" when
                the backend call failed or returned no created record.
        """
        try:
            created = await self.table.create_records([fields_from_album(album)])
        except BackendError as e:
            logger.error("Album creation failed: %s", e.message)
            raise BackendError(CREATE_FAILED_MESSAGE, context=e.context) from e
        except Exception as e:
            # e.g. a field value the backend client cannot encode
            logger.error("Album creation failed: %s", e, exc_info=True)
            raise BackendError(
                CREATE_FAILED_MESSAGE,
                context={"error_type": type(e).__name__},
            ) from e

        if not created:
            logger.error("Album creation returned no records")
            raise BackendError(CREATE_FAILED_MESSAGE)

        logger.info("Created album record %s", created[0].id)
        return album_from_fields(created[0].fields)
