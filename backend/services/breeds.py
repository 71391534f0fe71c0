"""Suggested breeds offered to clients when composing a post.

The list is advisory: posts accept any non-empty breed.
"""

from __future__ import annotations

from models import PetType

SUGGESTED_BREEDS: dict[PetType, tuple[str, ...]] = {
    PetType.DOG: (
        "Labrador Retriever",
        "German Shepherd",
        "Golden Retriever",
        "French Bulldog",
        "Bulldog",
        "Poodle",
        "Beagle",
        "Rottweiler",
        "Dachshund",
        "Yorkshire Terrier",
        "Boxer",
        "Chihuahua",
        "Great Dane",
        "Doberman",
        "Shih Tzu",
        "Other",
    ),
    PetType.CAT: (
        "Persian",
        "Maine Coon",
        "Siamese",
        "Ragdoll",
        "Bengal",
        "Abyssinian",
        "British Shorthair",
        "Sphynx",
        "Birman",
        "Russian Blue",
        "Other",
    ),
    PetType.BIRD: (
        "Parrot",
        "Cockatiel",
        "Budgerigar",
        "Canary",
        "Finch",
        "Lovebird",
        "Other",
    ),
    PetType.OTHER: ("Other",),
}


def suggested_breeds(pet_type: PetType | None = None) -> dict[str, list[str]]:
    if pet_type is not None:
        return {pet_type.value: list(SUGGESTED_BREEDS[pet_type])}
    return {key.value: list(values) for key, values in SUGGESTED_BREEDS.items()}
