"""
Generador de cargas de trabajo sintéticas.

Produce N ternas (llegada, tamaño, servicio) aleatorias en el formato que
consume `fitsim`:

    llegada   en [0, max_arrival)
    tamaño    en [1, max_size]
    servicio  en [1, max_service]
"""

import argparse
import random
import sys
from typing import List, Optional, Tuple

MAX_ARRIVAL = 80
MAX_SIZE = 30
MAX_SERVICE = 100


def generate_workload(
    n: int = 50,
    seed: Optional[int] = None,
    max_arrival: int = MAX_ARRIVAL,
    max_size: int = MAX_SIZE,
    max_service: int = MAX_SERVICE,
) -> List[Tuple[int, int, int]]:
    """
    Genera `n` ternas aleatorias de procesos.

    Args:
        n: Cantidad de procesos.
        seed: Semilla para reproducir la misma carga.
        max_arrival: Llegada máxima (exclusiva).
        max_size: Tamaño máximo de un proceso.
        max_service: Tiempo de servicio máximo.

    Returns:
        Lista de (llegada, tamaño, servicio).
    """
    rng = random.Random(seed)
    return [
        (
            rng.randrange(max_arrival),
            rng.randint(1, max_size),
            rng.randint(1, max_service),
        )
        for _ in range(n)
    ]


def create_parser():
    parser = argparse.ArgumentParser(
        description="Genera una carga de trabajo aleatoria para fitsim",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:
  fitsim-workload > pfile
  fitsim-workload -n 20 --seed 7 | fitsim b
        """
    )
    parser.add_argument("-n", "--processes", type=int, default=50,
                        help="Cantidad de procesos a generar (por defecto: 50)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Semilla del generador aleatorio")
    parser.add_argument("--max-arrival", type=int, default=MAX_ARRIVAL,
                        help="Llegada máxima, exclusiva (por defecto: 80)")
    parser.add_argument("--max-size", type=int, default=MAX_SIZE,
                        help="Tamaño máximo de un proceso (por defecto: 30)")
    parser.add_argument("--max-service", type=int, default=MAX_SERVICE,
                        help="Servicio máximo de un proceso (por defecto: 100)")
    return parser


def main(argv=None):
    """Escribe la carga generada en la salida estándar, una terna por línea."""
    args = create_parser().parse_args(argv)

    for arrival, size, service in generate_workload(
        args.processes, args.seed, args.max_arrival, args.max_size, args.max_service
    ):
        print(f"{arrival} {size} {service}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
