"""Emotion and reason tag endpoints."""

from fastapi import APIRouter, Depends, Response

from turtletrace.api.deps import get_tag_service
from turtletrace.api.schemas import TagCreateRequest, TagResponse
from turtletrace.domain.models import TagKind
from turtletrace.services import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/{kind}", response_model=list[TagResponse])
def list_tags(
    kind: TagKind,
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    """List the tags of one kind (built-in defaults until first edit)."""
    return [TagResponse.model_validate(t) for t in service.list_tags(kind)]


@router.post("/{kind}", response_model=TagResponse, status_code=201)
def add_tag(
    kind: TagKind,
    request: TagCreateRequest,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    return TagResponse.model_validate(service.add_tag(kind, request.name))


@router.delete("/{kind}/{tag_id}", status_code=204)
def delete_tag(
    kind: TagKind,
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> Response:
    service.delete_tag(kind, tag_id)
    return Response(status_code=204)
