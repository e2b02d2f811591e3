from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ACRCloud identify response shapes. Unknown fields are kept (extra="allow")
# so the raw body can be echoed back by diagnostics.

MATCH_CODE = 0
NO_MATCH_CODE = 1001


class _VendorModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class VendorStatus(_VendorModel):
    code: Optional[int] = None
    msg: Optional[str] = None
    version: Optional[str] = None


class VendorArtist(_VendorModel):
    name: str


class VendorAlbum(_VendorModel):
    name: Optional[str] = None


class VendorMusic(_VendorModel):
    title: str
    artists: List[VendorArtist] = Field(min_length=1)
    album: Optional[VendorAlbum] = None
    duration_ms: Optional[int] = None
    release_date: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    external_ids: Dict[str, Any] = Field(default_factory=dict)
    score: Optional[Union[int, float]] = None

    @field_validator("genres", mode="before")
    @classmethod
    def genre_names(cls, v: Any) -> List[str]:
        # ACRCloud sends [{"name": "Pop"}, ...]; plain strings are accepted too
        if v is None:
            return []
        names: List[str] = []
        for item in v:
            if isinstance(item, dict):
                name = item.get("name")
                if name:
                    names.append(str(name))
            elif item is not None:
                names.append(str(item))
        return names

    @field_validator("external_ids", mode="before")
    @classmethod
    def default_external_ids(cls, v: Any) -> Dict[str, Any]:
        return v or {}


class VendorMetadata(_VendorModel):
    # only music[0] is read; later candidates stay raw
    music: List[Any] = Field(default_factory=list)


class VendorResponse(_VendorModel):
    status: Optional[VendorStatus] = None
    metadata: Optional[VendorMetadata] = None
    cost_time: Optional[Union[float, int]] = None

    @property
    def code(self) -> Optional[int]:
        return self.status.code if self.status is not None else None

    def first_music(self) -> Optional[VendorMusic]:
        """Validate and return the top candidate.

        Raises ``pydantic.ValidationError`` when that entry is irregular.
        """
        if self.metadata is None or not self.metadata.music:
            return None
        return VendorMusic.model_validate(self.metadata.music[0])
