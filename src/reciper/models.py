"""Pydantic models for recipe data and its persisted document form."""

import base64
import binascii
import json
import uuid
from typing import Any, Iterable, List, Optional, Tuple, Union

from PIL import Image
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictStr,
    ValidationError,
    field_serializer,
    field_validator,
)

from .errors import DecodeError, EncodeError
from .images import compress_image, decode_image

# Choices offered by the add form; any other text is still accepted.
SUGGESTED_CATEGORIES = ["Chinese", "Mexican", "Italian", "Indian", "French", "Other"]

# Keys a persisted document must carry. A missing id is minted on decode.
REQUIRED_KEYS = ("name", "ingredients", "instructions", "category", "isFavorite")


class Recipe(BaseModel):
    """A single recipe in the collection.

    Attribute names are snake_case; the persisted document uses the camelCase
    aliases (``isFavorite``, ``imageData``). The decoded photo is derived from
    ``image_data`` on demand and is never part of the document or of equality.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: StrictStr = Field(default_factory=lambda: str(uuid.uuid4()), description="Opaque identity")
    name: StrictStr = Field(..., description="Display name")
    ingredients: List[StrictStr] = Field(..., description="Ingredients in display order")
    instructions: StrictStr = Field(..., description="Free-text instructions")
    category: StrictStr = Field(..., description="Category, usually one of SUGGESTED_CATEGORIES")
    is_favorite: StrictBool = Field(False, alias="isFavorite")
    image_data: Optional[bytes] = Field(None, alias="imageData", description="JPEG photo payload")

    _decoded: Optional[Tuple[bytes, Optional[Image.Image]]] = PrivateAttr(default=None)

    @field_validator("image_data", mode="before")
    @classmethod
    def _decode_base64(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"imageData is not valid base64: {e}") from e
        return value

    @field_serializer("image_data")
    def _encode_base64(self, value: Optional[bytes]) -> Optional[str]:
        if value is None:
            return None
        return base64.b64encode(value).decode("ascii")

    @classmethod
    def create(
        cls,
        name: str,
        ingredients: Iterable[str],
        instructions: str,
        category: str,
        image: Optional[bytes] = None,
    ) -> "Recipe":
        """Build a fresh recipe with a new id and favorite unset."""
        return cls(
            name=name,
            ingredients=list(ingredients),
            instructions=instructions,
            category=category,
            image_data=image,
        )

    @property
    def image(self) -> Optional[Image.Image]:
        """Decoded photo, rebuilt from image_data whenever that changes."""
        data = self.image_data
        if data is None:
            return None

        cached = self._decoded
        if cached is not None and cached[0] is data:
            return cached[1]

        image = decode_image(data)
        self._decoded = (data, image)
        return image

    def attach_image(self, image: Union[Image.Image, bytes]) -> None:
        """Attach or replace the photo, re-encoding it as low-quality JPEG."""
        self.image_data = compress_image(image)
        self._decoded = None

    def toggle_favorite(self) -> bool:
        """Flip the favorite flag in place and return the new value."""
        self.is_favorite = not self.is_favorite
        return self.is_favorite

    def to_document(self) -> dict:
        """Return the persisted document form of this recipe."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: Any) -> "Recipe":
        """Rebuild a recipe from its persisted document.

        Raises:
            DecodeError: If a required key is missing or has the wrong type.
        """
        if not isinstance(document, dict):
            raise DecodeError(f"Recipe document must be an object, got {type(document).__name__}")

        missing = [key for key in REQUIRED_KEYS if key not in document]
        if missing:
            raise DecodeError(f"Recipe document is missing: {', '.join(missing)}")

        try:
            return cls.model_validate(document)
        except ValidationError as e:
            raise DecodeError(f"Invalid recipe document: {e}") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.model_dump() == other.model_dump()


def encode_recipes(recipes: Iterable[Recipe]) -> bytes:
    """Serialize a recipe sequence to a JSON array of documents."""
    documents = []
    for recipe in recipes:
        if not isinstance(recipe, Recipe):
            raise EncodeError(f"Cannot encode {type(recipe).__name__} as a recipe")
        documents.append(recipe.to_document())

    try:
        return json.dumps(documents).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to encode recipes: {e}") from e


def decode_recipes(raw: Union[bytes, str]) -> List[Recipe]:
    """Parse a JSON array of recipe documents.

    Raises:
        DecodeError: On malformed JSON, a non-array payload or a bad element.
    """
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Stored recipes are not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise DecodeError(f"Stored recipes must be a JSON array, got {type(payload).__name__}")

    return [Recipe.from_document(document) for document in payload]
