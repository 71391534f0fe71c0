"""Pet post endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import BaseModel

from api.deps import get_current_identity, get_pet_post_service
from services import PetPostService, read_upload_file
from services.auth import Identity
from services.breeds import suggested_breeds
from services.pet_posts import ALL_PET_TYPES, parse_pet_type
from .post_views import PetPostResponse, to_post_responses

router = APIRouter(prefix="/pet-posts", tags=["pet-posts"])


class CommentCreateRequest(BaseModel):
    text: str


class SaveStatusResponse(BaseModel):
    saved: bool


class DetailResponse(BaseModel):
    detail: str


async def _read_image(image: UploadFile | None, max_bytes: int) -> bytes | None:
    # Browsers send an empty part when no file was picked.
    if image is None or not image.filename:
        return None
    return await read_upload_file(image, max_bytes)


@router.get("", response_model=list[PetPostResponse])
async def list_pet_posts(
    pet_type: Annotated[str | None, Query(alias="petType")] = None,
    service: PetPostService = Depends(get_pet_post_service),
) -> list[PetPostResponse]:
    return to_post_responses(await service.list_posts(pet_type))


@router.get("/breeds", response_model=dict[str, list[str]])
async def list_suggested_breeds(
    pet_type: Annotated[str | None, Query(alias="petType")] = None,
) -> dict[str, list[str]]:
    if pet_type is None or pet_type.strip().lower() == ALL_PET_TYPES:
        return suggested_breeds()
    return suggested_breeds(parse_pet_type(pet_type))


@router.get("/saved", response_model=list[PetPostResponse])
async def list_saved_pet_posts(
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> list[PetPostResponse]:
    return to_post_responses(await service.list_saved(identity))


@router.get("/user/{user_id}", response_model=list[PetPostResponse])
async def list_pet_posts_by_author(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> list[PetPostResponse]:
    return to_post_responses(await service.list_by_author(user_id))


@router.get("/breed/{breed}", response_model=list[PetPostResponse])
async def list_pet_posts_by_breed(
    breed: str,
    service: PetPostService = Depends(get_pet_post_service),
) -> list[PetPostResponse]:
    return to_post_responses(await service.list_by_breed(breed))


@router.get("/{post_id}", response_model=PetPostResponse)
async def get_pet_post(
    post_id: int,
    service: PetPostService = Depends(get_pet_post_service),
) -> PetPostResponse:
    return PetPostResponse.from_view(await service.get(post_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PetPostResponse)
async def create_pet_post(
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    pet_type: Annotated[str | None, Form(alias="petType")] = None,
    breed: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> PetPostResponse:
    image_bytes = await _read_image(image, service.upload_max_bytes)
    view = await service.create(
        identity,
        title=title,
        description=description,
        pet_type=pet_type,
        breed=breed,
        image_bytes=image_bytes,
    )
    return PetPostResponse.from_view(view)


@router.put("/{post_id}", response_model=PetPostResponse)
async def update_pet_post(
    post_id: int,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    pet_type: Annotated[str | None, Form(alias="petType")] = None,
    breed: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> PetPostResponse:
    image_bytes = await _read_image(image, service.upload_max_bytes)
    view = await service.edit(
        identity,
        post_id,
        title=title,
        description=description,
        pet_type=pet_type,
        breed=breed,
        image_bytes=image_bytes,
    )
    return PetPostResponse.from_view(view)


@router.delete("/unsave/{post_id}", response_model=DetailResponse)
async def unsave_pet_post(
    post_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> DetailResponse:
    await service.unsave(identity, post_id)
    return DetailResponse(detail="Post unsaved successfully")


@router.delete("/{post_id}", response_model=DetailResponse)
async def delete_pet_post(
    post_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> DetailResponse:
    await service.delete(identity, post_id)
    return DetailResponse(detail="Post deleted successfully")


@router.post("/{post_id}/like", response_model=PetPostResponse)
async def toggle_pet_post_like(
    post_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> PetPostResponse:
    return PetPostResponse.from_view(await service.toggle_like(identity, post_id))


@router.post("/{post_id}/comments", response_model=PetPostResponse)
async def add_pet_post_comment(
    post_id: int,
    payload: CommentCreateRequest,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> PetPostResponse:
    return PetPostResponse.from_view(
        await service.add_comment(identity, post_id, payload.text)
    )


@router.post("/{post_id}/save", response_model=SaveStatusResponse)
async def toggle_pet_post_save(
    post_id: int,
    identity: Identity = Depends(get_current_identity),
    service: PetPostService = Depends(get_pet_post_service),
) -> SaveStatusResponse:
    return SaveStatusResponse(saved=await service.toggle_save(identity, post_id))
