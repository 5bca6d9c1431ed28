"""Tag Routes — create labels, find items carrying a label."""

from fastapi import APIRouter, Depends, status

from sharehub.api.dependencies import get_stores
from sharehub.schemas.reputation import TaggedItem
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.post("/{label}", status_code=status.HTTP_201_CREATED)
async def create_tag(label: str, stores: StoreRegistry = Depends(get_stores)):
    tag = await stores.tags.create_tag(label)
    return {"id": str(tag.id), "label": tag.label}


@router.get("/{label}/items", response_model=list[TaggedItem])
async def get_items_with_tag(label: str, stores: StoreRegistry = Depends(get_stores)):
    return await stores.tags.get_items_with_tag(label)
