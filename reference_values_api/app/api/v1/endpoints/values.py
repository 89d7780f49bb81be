"""
Reference value endpoints.

These routes list, look up, create and update reference values held
by the :class:`ReferenceValueStore` attached to the application.  There
is no delete route; records are never removed.  Authentication is
handled by ``AuthMiddleware`` before any of these handlers run.

Handlers are plain functions so FastAPI runs them in its threadpool;
a slow file write blocks only the request performing it while the
store lock serialises concurrent mutations.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from reference_values_api.app.core.exceptions import NotFoundError, StorageError
from reference_values_api.app.schemas.reference_value import ReferenceValue, ReferenceValueUpdate
from reference_values_api.app.services.reference_value_store import ReferenceValueStore

router = APIRouter()

NOT_FOUND_MESSAGE = "Value not found."
SAVE_FAILED_MESSAGE = "Failed to save reference values."


def get_store(request: Request) -> ReferenceValueStore:
    """Dependency returning the store owned by the running application."""
    return request.app.state.store


@router.get("", response_model=List[ReferenceValue])
def list_values(store: ReferenceValueStore = Depends(get_store)) -> List[ReferenceValue]:
    """Return every reference value in insertion order."""
    return store.list()


@router.get("/{value_id}", response_model=ReferenceValue)
def get_value(value_id: str, store: ReferenceValueStore = Depends(get_store)) -> ReferenceValue:
    """Retrieve a single reference value by id.

    If several records share the id, the earliest one is returned.
    """
    value = store.find_by_id(value_id)
    if value is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return value


@router.post("", response_model=ReferenceValue, status_code=status.HTTP_201_CREATED)
def create_value(
    value_in: ReferenceValue,
    store: ReferenceValueStore = Depends(get_store),
) -> ReferenceValue:
    """Append a new reference value using the id supplied by the client."""
    try:
        return store.append(value_in)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SAVE_FAILED_MESSAGE)


@router.put("/{value_id}", response_model=ReferenceValue)
def update_value(
    value_id: str,
    value_in: ReferenceValueUpdate,
    store: ReferenceValueStore = Depends(get_store),
) -> ReferenceValue:
    """Replace name, reference, description and image_url of a value.

    The id is taken from the path; any id in the body is ignored.
    """
    try:
        return store.replace_fields(value_id, value_in)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SAVE_FAILED_MESSAGE)
