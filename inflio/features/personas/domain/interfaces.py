from abc import ABC, abstractmethod
from typing import List, Optional
from .models import Persona

class IPersonaStore(ABC):
    """
    Contract for persona persistence.
    Loaded once when a consumer starts, written back after every change.
    """

    @abstractmethod
    def load(self) -> List[Persona]:
        """Returns every stored persona, oldest first."""
        pass

    @abstractmethod
    def save(self, personas: List[Persona]) -> None:
        """Replaces the stored set with `personas`."""
        pass

    @abstractmethod
    def load_active_id(self) -> Optional[str]:
        pass

    @abstractmethod
    def save_active_id(self, persona_id: Optional[str]) -> None:
        """Stores the active persona id; None clears it."""
        pass
