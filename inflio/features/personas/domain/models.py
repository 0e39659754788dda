# File: inflio/features/personas/domain/models.py
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_persona_id() -> str:
    return f"persona_{uuid.uuid4().hex[:12]}"


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return utc_now()
    # JavaScript exports use a trailing Z
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class PersonaPhoto:
    id: str
    url: str
    name: str
    uploaded_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "name": self.name,
            "uploadedAt": self.uploaded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonaPhoto":
        return cls(
            id=str(data["id"]),
            url=data["url"],
            name=data.get("name", ""),
            uploaded_at=_parse_datetime(data.get("uploadedAt")),
        )


@dataclass
class Persona:
    """
    A creator identity (name, voice, portrait photos) used to personalise
    generated thumbnails and posts.
    """
    id: str
    name: str
    description: str = ""
    photos: List[PersonaPhoto] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    is_default: bool = False
    tags: List[str] = field(default_factory=list)
    usage_count: int = 0

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Persona name cannot be empty.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "photos": [p.to_dict() for p in self.photos],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "isDefault": self.is_default,
            "tags": list(self.tags),
            "usageCount": self.usage_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Persona":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            photos=[PersonaPhoto.from_dict(p) for p in data.get("photos") or []],
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
            is_default=bool(data.get("isDefault", False)),
            tags=list(data.get("tags") or []),
            usage_count=int(data.get("usageCount") or 0),
        )
