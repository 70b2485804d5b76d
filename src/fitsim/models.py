"""
Modelos de datos para la simulación de ubicación contigua.

Este módulo define las estructuras de datos principales utilizadas en toda la
simulación: `Process`, `Segment`, el estado `Status` y las instantáneas
(`Snapshot`) que se entregan al reportador.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Status(Enum):
    """Estados de un proceso en la simulación."""
    NOT_ARRIVED = "NOT_ARRIVED"
    WAITING = "WAITING"
    RESIDENT = "RESIDENT"
    FINISHED = "FINISHED"


class Event(Enum):
    """Etiquetas de los eventos que se reportan durante la simulación."""
    START = "START"
    ARRIVED = "ARRIVED"
    FINISHED = "FINISHED"
    INMEMORY = "INMEMORY"
    END = "END"


@dataclass
class Process:
    """
    Representa un proceso de la carga de trabajo.

    Attributes:
        pid: Identificador estable del proceso (0..N-1).
        arrival: Tick en el que llega el proceso.
        size: Cantidad de memoria contigua que requiere.
        service: Tiempo de servicio total requerido.
        remaining: Tiempo de servicio restante (por defecto: igual a `service`).
        status: Estado actual del proceso (por defecto: Status.NOT_ARRIVED).
    """
    pid: int
    arrival: int
    size: int
    service: int
    remaining: Optional[int] = None
    status: Status = Status.NOT_ARRIVED

    def __post_init__(self):
        if self.remaining is None:
            self.remaining = self.service

    def to_row(self) -> dict:
        """
        Convierte el proceso a un diccionario para fines de registro o visualización.

        Returns:
            dict: Representación del proceso en formato de diccionario.
        """
        return {
            'pid': self.pid,
            'arrival': self.arrival,
            'size': self.size,
            'service': self.service,
            'remaining': self.remaining,
            'status': self.status.value
        }


@dataclass
class Segment:
    """
    Tramo contiguo del espacio de direcciones, libre u ocupado.

    Attributes:
        start: Dirección inicial del tramo.
        size: Longitud del tramo (siempre > 0).
        pid: Proceso que ocupa el tramo, o None si es un hueco.
    """
    start: int
    size: int
    pid: Optional[int] = None

    @property
    def is_free(self) -> bool:
        """Indica si el tramo es un hueco."""
        return self.pid is None

    @property
    def end(self) -> int:
        return self.start + self.size

    def to_tuple(self) -> Tuple[Optional[int], int, int]:
        return (self.pid, self.start, self.size)


@dataclass(frozen=True)
class Snapshot:
    """
    Instantánea inmutable del estado de la simulación en un evento.

    Attributes:
        time: Tick actual.
        event: Etiqueta del evento.
        pid: Proceso asociado al evento, o None para START/END.
        segments: Tramos de memoria en orden como (pid o None, inicio, tamaño).
        waiting: Procesos en espera como (pid, llegada, tamaño, restante).
    """
    time: int
    event: Event
    pid: Optional[int]
    segments: Tuple[Tuple[Optional[int], int, int], ...]
    waiting: Tuple[Tuple[int, int, int, int], ...]


def percent_unserviced(unserviced: int, required: int) -> int:
    """
    Calcula el porcentaje de servicio no atendido con truncamiento entero.

    Args:
        unserviced: Tiempo de servicio que quedó sin atender.
        required: Tiempo de servicio total requerido.

    Returns:
        int: Porcentaje truncado, o 0 si el servicio requerido es 0.
    """
    if required == 0:
        return 0
    return unserviced * 100 // required
