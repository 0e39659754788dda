import json
import logging
from dataclasses import replace
from typing import List, Optional

from inflio.core.exceptions import PersonaImportError
from ..data.repository import SqlPersonaStore
from ..domain.interfaces import IPersonaStore
from ..domain.models import Persona, PersonaPhoto, new_persona_id, utc_now

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"

_UPDATABLE_FIELDS = {"name", "description", "photos", "tags", "is_default", "usage_count"}


class PersonaManager:
    """
    Public API for the Personas Feature.
    Holds the persona list in memory and writes it back to the store after every change.
    """

    def __init__(self, store: Optional[IPersonaStore] = None):
        # In a full DI framework, this would be injected.
        self.store = store or SqlPersonaStore()
        self.personas: List[Persona] = []
        self.active: Optional[Persona] = None
        self.sync()

    def sync(self) -> None:
        """(Re)loads personas and the active selection from the store."""
        self.personas = self.store.load()
        active_id = self.store.load_active_id()
        self.active = self.get_by_id(active_id) if active_id else None
        logger.info(f"Loaded {len(self.personas)} personas (active: {active_id})")

    def get_by_id(self, persona_id: str) -> Optional[Persona]:
        for persona in self.personas:
            if persona.id == persona_id:
                return persona
        return None

    def add(self, name: str, description: str = "", photos: Optional[List[PersonaPhoto]] = None,
            tags: Optional[List[str]] = None, is_default: bool = False) -> Persona:
        is_first = not self.personas
        persona = Persona(
            id=new_persona_id(),
            name=name.strip(),
            description=description,
            photos=list(photos or []),
            tags=list(tags or []),
            # The first persona is always the default
            is_default=is_default or is_first
        )
        self.personas.append(persona)
        self._persist()

        # The first persona becomes the active one
        if is_first:
            self.active = persona
            self.store.save_active_id(persona.id)

        logger.info(f"Persona '{persona.name}' created ({persona.id})")
        return persona

    def update(self, persona_id: str, **changes) -> Persona:
        """
        Applies field changes and stamps updated_at.
        The edit is all-or-nothing: nothing changes unless the result validates and persists.

        Raises:
            KeyError: If the persona does not exist.
            ValueError: If a field is not updatable or the result is invalid.
        """
        persona = self.get_by_id(persona_id)
        if persona is None:
            raise KeyError(persona_id)

        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update persona fields: {sorted(unknown)}")

        if "photos" in changes:
            photos = list(changes["photos"] or [])
            if not all(isinstance(p, PersonaPhoto) for p in photos):
                raise ValueError("Persona photos must be PersonaPhoto instances.")
            changes["photos"] = photos
        if "tags" in changes:
            changes["tags"] = list(changes["tags"] or [])

        # replace() re-runs __post_init__ validation
        candidate = replace(persona, **changes, updated_at=utc_now())

        position = self.personas.index(persona)
        updated = list(self.personas)
        updated[position] = candidate
        self.store.save(updated)

        self.personas = updated
        if self.active is persona:
            self.active = candidate
        return candidate

    def delete(self, persona_id: str) -> bool:
        persona = self.get_by_id(persona_id)
        if persona is None:
            return False

        self.personas.remove(persona)

        if self.active is not None and self.active.id == persona_id:
            self.active = None
            self.store.save_active_id(None)

        # Hand the default flag to the next persona in line
        if persona.is_default and self.personas:
            self.personas[0].is_default = True
            self.personas[0].updated_at = utc_now()

        self._persist()
        logger.info(f"Persona '{persona.name}' deleted")
        return True

    def set_active(self, persona_id: Optional[str]) -> Optional[Persona]:
        """Selects the active persona (None clears it). Selecting counts as a use."""
        if persona_id is None:
            self.active = None
            self.store.save_active_id(None)
            return None

        persona = self.get_by_id(persona_id)
        if persona is None:
            raise KeyError(persona_id)

        self.active = persona
        self.store.save_active_id(persona.id)
        return self.update(persona.id, usage_count=persona.usage_count + 1)

    def export(self) -> str:
        return json.dumps({
            "version": EXPORT_VERSION,
            "exportDate": utc_now().isoformat(),
            "personas": [p.to_dict() for p in self.personas]
        }, indent=2)

    def import_(self, data: str) -> int:
        """
        Merges personas from an export payload.
        Names already present (case-insensitive) are skipped; imported personas get fresh ids.

        Returns:
            Number of personas imported.

        Raises:
            PersonaImportError: If the payload is not a valid export.
        """
        try:
            parsed = json.loads(data)
        except (TypeError, json.JSONDecodeError) as e:
            raise PersonaImportError(f"Invalid import format: {e}") from e

        if not isinstance(parsed, dict) or not isinstance(parsed.get("personas"), list):
            raise PersonaImportError("Invalid import format: missing 'personas' list")

        seen_names = {p.name.casefold() for p in self.personas}
        imported: List[Persona] = []
        for raw in parsed["personas"]:
            try:
                persona = Persona.from_dict({**raw, "id": new_persona_id()})
            except (KeyError, TypeError, ValueError) as e:
                raise PersonaImportError(f"Invalid persona entry: {e}") from e

            key = persona.name.casefold()
            if key in seen_names:
                continue
            seen_names.add(key)
            persona.updated_at = utc_now()
            imported.append(persona)

        if not imported:
            logger.info("No new personas to import")
            return 0

        self.personas.extend(imported)
        self._persist()
        logger.info(f"Imported {len(imported)} personas")
        return len(imported)

    def _persist(self) -> None:
        self.store.save(self.personas)
