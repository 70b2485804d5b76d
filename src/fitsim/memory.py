"""
Operaciones sobre el mapa de memoria contigua.

Este módulo implementa la lista ordenada de tramos (libres u ocupados) que
modela el espacio de direcciones, con división al insertar y fusión de
huecos vecinos al liberar. Los tramos se identifican por su posición en la
lista (handle); cada operación que modifica el mapa devuelve un handle
nuevo, válido hasta la siguiente modificación.
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple
from .models import Segment


class MemoryMapError(RuntimeError):
    """Violación del contrato del mapa de memoria (error de programación)."""


class MemoryMap:
    """
    Gestiona los tramos de memoria en orden ascendente de dirección.

    Invariantes (se cumplen antes y después de cada operación):
    - Los tramos son contiguos: segments[i].end == segments[i+1].start.
    - El primero empieza en 0 y el último termina en `total_size`.
    - No existen tramos de tamaño 0.
    - No hay dos huecos adyacentes.
    """

    def __init__(self, total_size: int):
        """Inicializa el mapa con un único hueco de `total_size`."""
        self.total_size = 0
        self.segments: List[Segment] = []
        self.initialize(total_size)

    def initialize(self, total_size: int) -> None:
        """
        Reemplaza todo el estado por un hueco que cubre [0, total_size).

        Raises:
            MemoryMapError: Si `total_size` no es positivo.
        """
        if total_size <= 0:
            raise MemoryMapError(f"El tamaño de memoria debe ser positivo: {total_size}")
        self.total_size = total_size
        self.segments = [Segment(start=0, size=total_size)]

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, handle: int) -> Segment:
        return self.segments[handle]

    def find(
        self,
        predicate: Callable[[Segment], bool],
        start: int = 0,
        stop: Optional[int] = None,
    ) -> Iterator[int]:
        """
        Recorre los tramos desde `start` hacia adelante en orden de lista.

        Args:
            predicate: Condición que debe cumplir el tramo.
            start: Handle desde el que comienza el recorrido.
            stop: Handle (exclusivo) en el que se detiene; por defecto el final.

        Yields:
            int: Handles de los tramos que cumplen `predicate`.
        """
        end = len(self.segments) if stop is None else min(stop, len(self.segments))
        for handle in range(max(start, 0), end):
            if predicate(self.segments[handle]):
                yield handle

    def insert(self, hole_handle: int, size: int, pid: int) -> int:
        """
        Ubica un proceso al comienzo del hueco indicado.

        Args:
            hole_handle: Handle del hueco que se divide.
            size: Tamaño requerido por el proceso.
            pid: Proceso que ocupará el nuevo tramo.

        Returns:
            int: Handle del tramo ocupado recién creado.

        Raises:
            MemoryMapError: Si el handle no existe, el tramo no es un hueco o
                es más chico que `size`.
        """
        if not 0 <= hole_handle < len(self.segments):
            raise MemoryMapError(f"Handle inválido: {hole_handle}")
        if size <= 0:
            raise MemoryMapError(f"Tamaño inválido para el proceso {pid}: {size}")

        hole = self.segments[hole_handle]
        if not hole.is_free:
            raise MemoryMapError(
                f"El tramo {hole_handle} está ocupado por el proceso {hole.pid}"
            )
        if hole.size < size:
            raise MemoryMapError(
                f"El hueco {hole_handle} ({hole.size}) es menor que {size}"
            )

        occupied = Segment(start=hole.start, size=size, pid=pid)
        remainder = hole.size - size
        if remainder > 0:
            # El hueco se achica y queda a continuación del proceso.
            hole.start += size
            hole.size = remainder
            self.segments.insert(hole_handle, occupied)
        else:
            self.segments[hole_handle] = occupied

        return hole_handle

    def release(self, pid: int) -> int:
        """
        Libera el tramo del proceso y lo fusiona con los huecos vecinos.

        Args:
            pid: Proceso cuyo tramo debe liberarse.

        Returns:
            int: Handle del hueco resultante.

        Raises:
            MemoryMapError: Si ningún tramo pertenece a `pid`.
        """
        handle = self.locate(pid)
        if handle is None:
            raise MemoryMapError(f"No hay un tramo asignado al proceso {pid}")

        freed = self.segments[handle]
        left = self.segments[handle - 1] if handle > 0 else None
        right = self.segments[handle + 1] if handle + 1 < len(self.segments) else None
        left_free = left is not None and left.is_free
        right_free = right is not None and right.is_free

        if left_free and right_free:
            # Hueco a ambos lados: el izquierdo absorbe al liberado y al derecho.
            left.size += freed.size + right.size
            del self.segments[handle:handle + 2]
            return handle - 1

        if left_free:
            left.size += freed.size
            del self.segments[handle]
            return handle - 1

        if right_free:
            right.start = freed.start
            right.size += freed.size
            del self.segments[handle]
            return handle

        freed.pid = None
        return handle

    def locate(self, pid: int) -> Optional[int]:
        """Devuelve el handle del tramo ocupado por `pid`, o None."""
        for handle in self.find(lambda seg: seg.pid == pid):
            return handle
        return None

    def table_snapshot(self) -> Tuple[Tuple[Optional[int], int, int], ...]:
        """
        Genera una copia inmutable de la tabla de memoria.

        Returns:
            Tupla de (pid o None, inicio, tamaño) por cada tramo, en orden.
        """
        return tuple(seg.to_tuple() for seg in self.segments)

    def stats(self) -> Dict[str, int]:
        """Calcula el uso de memoria y la fragmentación externa actual."""
        holes = [seg.size for seg in self.segments if seg.is_free]
        free = sum(holes)
        return {
            'used': self.total_size - free,
            'free': free,
            'largest_free': max(holes, default=0),
            'num_holes': len(holes),
        }

    def check_invariants(self) -> None:
        """
        Valida las invariantes del mapa.

        Raises:
            AssertionError: Si alguna invariante es violada.
        """
        assert self.segments, "El mapa de memoria está vacío"
        assert self.segments[0].start == 0, (
            f"El primer tramo empieza en {self.segments[0].start}, no en 0"
        )
        assert self.segments[-1].end == self.total_size, (
            f"El último tramo termina en {self.segments[-1].end}, no en {self.total_size}"
        )

        owners = set()
        for i, seg in enumerate(self.segments):
            assert seg.size > 0, f"Tramo {i} de tamaño {seg.size}"
            if seg.pid is not None:
                assert seg.pid not in owners, f"PID duplicado {seg.pid} en el mapa"
                owners.add(seg.pid)
            if i + 1 < len(self.segments):
                nxt = self.segments[i + 1]
                assert seg.end == nxt.start, (
                    f"Tramos {i} y {i + 1} no son contiguos ({seg.end} != {nxt.start})"
                )
                assert not (seg.is_free and nxt.is_free), (
                    f"Huecos adyacentes sin fusionar en {i} y {i + 1}"
                )
