"""
Estrategias de ubicación de procesos en memoria contigua.

Este módulo implementa los cuatro algoritmos de búsqueda de hueco
(First-Fit, Next-Fit, Best-Fit y Worst-Fit). Todos son consultas puras
sobre el `MemoryMap`: eligen un hueco pero nunca modifican el mapa.
"""

from abc import ABC, abstractmethod
from enum import Enum
from itertools import chain
from typing import Optional
from .memory import MemoryMap


def _fits(size: int):
    return lambda seg: seg.is_free and seg.size >= size


class PlacementStrategy(ABC):
    """Interfaz común de los algoritmos de ubicación."""

    #: Si es True, el simulador comienza la búsqueda desde el cursor.
    uses_cursor = False

    @abstractmethod
    def find_fit(self, memory: MemoryMap, size: int, start: int = 0) -> Optional[int]:
        """
        Busca un hueco donde ubicar un proceso de tamaño `size`.

        Args:
            memory: Mapa de memoria sobre el que se busca.
            size: Tamaño requerido.
            start: Handle desde el que se busca (solo lo usa Next-Fit).

        Returns:
            Handle del hueco elegido, o None si ninguno alcanza.
        """


class FirstFit(PlacementStrategy):
    """Primer hueco suficiente desde el comienzo de la memoria."""

    def find_fit(self, memory: MemoryMap, size: int, start: int = 0) -> Optional[int]:
        return next(memory.find(_fits(size)), None)


class NextFit(PlacementStrategy):
    """
    Primer hueco suficiente a partir del cursor.

    Recorre desde el cursor hasta el final y, si no encuentra nada, vuelve al
    comienzo y recorre hasta el cursor (sin incluirlo).
    """

    uses_cursor = True

    def find_fit(self, memory: MemoryMap, size: int, start: int = 0) -> Optional[int]:
        if not 0 <= start < len(memory):
            start = 0
        candidates = chain(
            memory.find(_fits(size), start),
            memory.find(_fits(size), 0, stop=start),
        )
        return next(candidates, None)


class BestFit(PlacementStrategy):
    """Hueco suficiente que deja el menor sobrante; en empate, el primero."""

    def find_fit(self, memory: MemoryMap, size: int, start: int = 0) -> Optional[int]:
        best = None
        least_diff = None
        for handle in memory.find(_fits(size)):
            diff = memory[handle].size - size
            if least_diff is None or diff < least_diff:
                least_diff = diff
                best = handle
        return best


class WorstFit(PlacementStrategy):
    """Hueco suficiente más grande; en empate, el primero."""

    def find_fit(self, memory: MemoryMap, size: int, start: int = 0) -> Optional[int]:
        worst = None
        largest = 0
        for handle in memory.find(_fits(size)):
            if worst is None or memory[handle].size > largest:
                largest = memory[handle].size
                worst = handle
        return worst


class Algorithm(Enum):
    """Algoritmos disponibles, indexados por la letra de la línea de comandos."""
    FIRST_FIT = "f"
    NEXT_FIT = "n"
    BEST_FIT = "b"
    WORST_FIT = "w"

    @classmethod
    def from_selector(cls, selector: Optional[str]) -> Optional["Algorithm"]:
        """
        Resuelve la letra del algoritmo ("f", "n", "b" o "w").

        Returns:
            El algoritmo correspondiente, o None si la letra no es válida.
        """
        if not selector:
            return None
        try:
            return cls(selector[0])
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def strategy(self) -> PlacementStrategy:
        """Crea la estrategia de ubicación asociada."""
        return _STRATEGIES[self]()


_DISPLAY_NAMES = {
    Algorithm.FIRST_FIT: "first fit",
    Algorithm.NEXT_FIT: "next fit",
    Algorithm.BEST_FIT: "best fit",
    Algorithm.WORST_FIT: "worst fit",
}

_STRATEGIES = {
    Algorithm.FIRST_FIT: FirstFit,
    Algorithm.NEXT_FIT: NextFit,
    Algorithm.BEST_FIT: BestFit,
    Algorithm.WORST_FIT: WorstFit,
}
