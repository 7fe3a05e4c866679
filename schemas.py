from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    BUG = "BUG"
    MELHORIA = "MELHORIA"
    REQUISITO = "REQUISITO"


def _as_str_id(value):
    # Catalog files and model replies sometimes carry numeric IDs
    return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    project_name: str = Field(alias="nome_projeto")
    sector: Optional[str] = Field(default=None, alias="setor")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return _as_str_id(value)


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    support_name: str = Field(alias="nome_suporte")
    sector: Optional[str] = Field(default=None, alias="setor")
    discord_handle: Optional[str] = Field(default=None, alias="usuario_discord")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return _as_str_id(value)


class AssistantRequest(BaseModel):
    description: Optional[str] = None
    audio: Optional[bytes] = None
    audio_mime_type: Optional[str] = None

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())

    @property
    def has_audio(self) -> bool:
        return bool(self.audio)


class AssistantData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: str
    description: str
    category: Category
    additional_information: Optional[str] = Field(default=None, alias="additionalInformation")
    product_id: Optional[str] = Field(default=None, alias="productId")
    user_ids: Optional[List[str]] = Field(default=None, alias="userIds")
    product: Optional[Product] = None
    users: Optional[List[User]] = None


class AssistantResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: Optional[AssistantData] = None
    confidence: Optional[float] = None
    processed_in: Optional[str] = Field(default=None, alias="processedIn")
    error: Optional[str] = None
    # HTTP status for failures; never serialized
    status_code: int = Field(default=200, exclude=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
