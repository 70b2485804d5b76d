"""
Motor principal de la simulación y coordinación de componentes.

Este módulo orquesta la simulación por ticks discretos: en cada tick se
procesan llegadas, terminaciones, ubicaciones y servicio, en ese orden fijo,
coordinando el mapa de memoria y la estrategia de ubicación elegida.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from .models import Event, Process, Snapshot, Status, percent_unserviced
from .memory import MemoryMap
from .placement import Algorithm

Reporter = Callable[[Snapshot], None]


@dataclass
class SimulationConfig:
    """
    Parámetros de una ejecución.

    Attributes:
        memory_size: Tamaño total de la memoria.
        total_time: Cantidad de ticks a simular.
        num_processes: Cantidad de procesos esperados en la carga de trabajo.
        algorithm: Algoritmo de ubicación.
    """
    memory_size: int = 100
    total_time: int = 100
    num_processes: int = 50
    algorithm: Algorithm = Algorithm.FIRST_FIT


class MemorySimulator:
    """
    Motor principal de la simulación de ubicación contigua.

    Esta clase es dueña del mapa de memoria, de la tabla de procesos y del
    cursor de Next-Fit durante toda la ejecución. El reportador solo recibe
    instantáneas inmutables.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        reporter: Optional[Reporter] = None,
        modo_depuracion: bool = False,
        nivel_log: str = "INFO",
    ):
        """
        Inicializa el simulador.

        Args:
            config: Parámetros de la simulación (por defecto: SimulationConfig()).
            reporter: Función que recibe cada instantánea de evento.
            modo_depuracion: Activa la validación de invariantes en cada tick.
            nivel_log: Nivel de bitácora ("INFO" o "DEBUG").
        """
        self.config = config or SimulationConfig()
        self.reporter = reporter
        self.strategy = self.config.algorithm.strategy()
        self.memory = MemoryMap(self.config.memory_size)
        self.processes: List[Process] = []
        self.cursor = 0
        self.current_time = 0
        self.modo_depuracion = modo_depuracion
        self.simulation_log: List[Snapshot] = []
        self._summary_cache: Optional[Dict] = None

        # Configurar logger
        self.logger = logging.getLogger('fitsim')
        self.logger.setLevel(getattr(logging, nivel_log.upper()))

        # Crear un handler de consola si aún no existe
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def inicializar(self, processes: List[Process]):
        """Inicializa el estado interno para una nueva ejecución."""
        self.processes = sorted(processes, key=lambda p: p.pid)
        for process in self.processes:
            process.remaining = process.service
            process.status = Status.NOT_ARRIVED
            if process.size > self.config.memory_size:
                self.logger.warning(
                    f"Proceso {process.pid} ({process.size}) no cabe en una memoria de "
                    f"{self.config.memory_size}; quedará en espera"
                )

        self.memory.initialize(self.config.memory_size)
        self.cursor = 0
        self.current_time = 0
        self.simulation_log = []
        self._summary_cache = None

        self._emitir(Event.START)

    def ejecutar_simulacion(self, processes: List[Process]) -> Dict:
        """
        Ejecuta la simulación completa.

        Args:
            processes: Lista de procesos a simular.

        Returns:
            dict: Resultados y métricas de la simulación.
        """
        self.inicializar(processes)

        # Bucle principal de simulación
        while self.paso() is not None:
            pass

        return self.finalizar()

    def esta_completa(self) -> bool:
        """Devuelve True cuando no quedan ticks por ejecutar."""
        return self.current_time >= self.config.total_time

    def paso(self) -> Optional[Dict[str, object]]:
        """Ejecuta un único tick de la simulación.

        Returns:
            Optional[Dict[str, object]]: Información del tick ejecutado o None
            si la simulación ya alcanzó el horizonte.
        """
        if self.esta_completa():
            return None

        # 1) Llegadas
        llegadas = self._manejar_llegadas()

        # 2) Terminaciones (antes de ubicar, para reutilizar la memoria liberada)
        terminados = self._manejar_terminaciones()

        # 3) Ubicación de procesos en espera
        ubicados = self._manejar_ubicaciones()

        # 4) Servicio a los procesos residentes
        self._dar_servicio()

        # 5) Validar invariantes (modo debug)
        self._validar_invariantes()

        tick_info: Dict[str, object] = {
            'time': self.current_time,
            'arrived': llegadas,
            'finished': terminados,
            'placed': ubicados,
            'waiting_count': sum(1 for p in self.processes if p.status is Status.WAITING),
            'resident_count': sum(1 for p in self.processes if p.status is Status.RESIDENT),
        }

        self.current_time += 1

        return tick_info

    def finalizar(self) -> Dict:
        """Completa los ticks pendientes y devuelve las métricas de resumen."""
        if self._summary_cache is None:
            while self.paso() is not None:
                pass

            self._emitir(Event.END)
            summary = self._calcular_metricas()
            summary['simulation_log'] = self.simulation_log
            self._summary_cache = summary

        return self._summary_cache

    def _manejar_llegadas(self) -> List[int]:
        """Marca como en espera a los procesos cuya llegada ya ocurrió."""
        llegadas = []
        for process in self.processes:
            if process.status is Status.NOT_ARRIVED and process.arrival <= self.current_time:
                process.status = Status.WAITING
                llegadas.append(process.pid)
                self._emitir(Event.ARRIVED, process.pid)
        return llegadas

    def _manejar_terminaciones(self) -> List[int]:
        """Libera la memoria de los procesos residentes que completaron su servicio."""
        terminados = []
        for process in self.processes:
            if process.status is Status.RESIDENT and process.remaining == 0:
                process.status = Status.FINISHED
                self.cursor = self.memory.release(process.pid)
                self.logger.debug(
                    f"t={self.current_time} proceso {process.pid} terminado, "
                    f"hueco resultante en {self.cursor}"
                )
                terminados.append(process.pid)
                self._emitir(Event.FINISHED, process.pid)
        return terminados

    def _manejar_ubicaciones(self) -> List[int]:
        """Intenta ubicar en memoria a cada proceso en espera."""
        ubicados = []
        for process in self.processes:
            if process.status is not Status.WAITING:
                continue

            start = self.cursor if self.strategy.uses_cursor else 0
            hole = self.strategy.find_fit(self.memory, process.size, start)
            if hole is None:
                # Sin hueco suficiente: se reintenta en el próximo tick.
                self.logger.debug(
                    f"t={self.current_time} proceso {process.pid} ({process.size}) sin hueco"
                )
                continue

            self.cursor = self.memory.insert(hole, process.size, process.pid)
            process.status = Status.RESIDENT
            self.logger.debug(
                f"t={self.current_time} proceso {process.pid} ubicado en "
                f"{self.memory[self.cursor].start}"
            )
            ubicados.append(process.pid)
            self._emitir(Event.INMEMORY, process.pid)
        return ubicados

    def _dar_servicio(self) -> None:
        """Descuenta un tick de servicio a cada proceso residente."""
        for process in self.processes:
            if process.status is Status.RESIDENT:
                process.remaining = max(0, process.remaining - 1)

    def obtener_snapshot_actual(self, event: Event, pid: Optional[int] = None) -> Snapshot:
        """
        Devuelve una instantánea inmutable del estado actual.

        Args:
            event: Etiqueta del evento.
            pid: Proceso asociado al evento, si corresponde.
        """
        waiting = tuple(
            (p.pid, p.arrival, p.size, p.remaining)
            for p in self.processes
            if p.status is Status.WAITING
        )
        return Snapshot(
            time=self.current_time,
            event=event,
            pid=pid,
            segments=self.memory.table_snapshot(),
            waiting=waiting,
        )

    def _emitir(self, event: Event, pid: Optional[int] = None) -> None:
        snapshot = self.obtener_snapshot_actual(event, pid)
        self.simulation_log.append(snapshot)
        if self.reporter is not None:
            self.reporter(snapshot)

    def _calcular_metricas(self) -> Dict:
        """Calcula las métricas finales de la simulación."""
        unserviced = sum(p.remaining for p in self.processes)
        required = sum(p.service for p in self.processes)

        return {
            'algorithm': self.config.algorithm.display_name,
            'unserviced': unserviced,
            'required_service': required,
            'percent_unserviced': percent_unserviced(unserviced, required),
            'tiempo_total': self.current_time,
            'processes': [p.to_row() for p in self.processes],
            'memory': self.memory.stats(),
        }

    def _validar_invariantes(self):
        """
        Valida las invariantes de la simulación en modo debug.

        Raises:
            AssertionError: Si alguna invariante es violada.
        """
        if not self.modo_depuracion:
            return

        # Invariantes del mapa: contigüidad, cobertura, sin tramos vacíos ni huecos adyacentes
        self.memory.check_invariants()

        # Cada proceso residente ocupa exactamente un tramo, y ningún otro lo hace
        residentes = {p.pid for p in self.processes if p.status is Status.RESIDENT}
        ocupantes = {seg.pid for seg in self.memory.segments if not seg.is_free}
        assert residentes == ocupantes, (
            f"Residentes {sorted(residentes)} no coinciden con el mapa {sorted(ocupantes)}"
        )
