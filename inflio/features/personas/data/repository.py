import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import sessionmaker
from inflio.core.database.connection import SessionLocal
from .sql_models import AppStateModel, PersonaModel
from ..domain.interfaces import IPersonaStore
from ..domain.models import Persona, PersonaPhoto

logger = logging.getLogger(__name__)

ACTIVE_PERSONA_KEY = "active_persona"


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class SqlPersonaStore(IPersonaStore):
    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def load(self) -> List[Persona]:
        with self.session_factory() as db:
            rows = db.query(PersonaModel).order_by(PersonaModel.position).all()
            return [self._to_domain(row) for row in rows]

    def save(self, personas: List[Persona]) -> None:
        """
        Transactional logic:
        1. Delete rows for personas no longer in the list.
        2. Upsert every persona, recording its list position.
        """
        with self.session_factory() as db:
            try:
                keep_ids = [p.id for p in personas]
                stale = db.query(PersonaModel)
                if keep_ids:
                    stale = stale.filter(PersonaModel.id.notin_(keep_ids))
                stale.delete(synchronize_session=False)

                for position, persona in enumerate(personas):
                    db.merge(PersonaModel(
                        id=persona.id,
                        name=persona.name,
                        description=persona.description,
                        photos=[p.to_dict() for p in persona.photos],
                        tags=list(persona.tags),
                        position=position,
                        is_default=persona.is_default,
                        usage_count=persona.usage_count,
                        created_at=persona.created_at,
                        updated_at=persona.updated_at
                    ))
                db.commit()
            except Exception:
                db.rollback()
                raise
        logger.debug(f"Saved {len(personas)} personas")

    def load_active_id(self) -> Optional[str]:
        with self.session_factory() as db:
            row = db.get(AppStateModel, ACTIVE_PERSONA_KEY)
            return row.value if row else None

    def save_active_id(self, persona_id: Optional[str]) -> None:
        with self.session_factory() as db:
            try:
                row = db.get(AppStateModel, ACTIVE_PERSONA_KEY)
                if persona_id is None:
                    if row is not None:
                        db.delete(row)
                elif row is None:
                    db.add(AppStateModel(key=ACTIVE_PERSONA_KEY, value=persona_id))
                else:
                    row.value = persona_id
                db.commit()
            except Exception:
                db.rollback()
                raise

    @staticmethod
    def _to_domain(row: PersonaModel) -> Persona:
        return Persona(
            id=row.id,
            name=row.name,
            description=row.description or "",
            photos=[PersonaPhoto.from_dict(p) for p in row.photos or []],
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
            is_default=bool(row.is_default),
            tags=list(row.tags or []),
            usage_count=row.usage_count or 0
        )
