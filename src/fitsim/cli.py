"""
Interfaz de línea de comandos del simulador de ubicación contigua.

Lee la carga de trabajo (entrada estándar o CSV), ejecuta la simulación con
el algoritmo elegido e imprime la bitácora de eventos y el resumen final.
"""

import argparse
import sys
from .io import format_snapshot, format_summary, read_processes_csv, read_workload
from .placement import Algorithm
from .simulator import MemorySimulator, SimulationConfig


def create_parser():
    """
    Crea el parser de argumentos de la línea de comandos.

    Returns:
        argparse.ArgumentParser: Parser configurado.
    """
    parser = argparse.ArgumentParser(
        prog="fitsim",
        description="Simulador de algoritmos de ubicación en memoria contigua",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:
  fitsim f < pfile > resultsf
  fitsim-workload --seed 1 | fitsim n --log-level DEBUG
  fitsim w --csv examples/processes.csv
        """
    )

    parser.add_argument(
        "fit_type",
        nargs="?",
        help="Algoritmo: f (first fit), n (next fit), b (best fit), w (worst fit)"
    )

    parser.add_argument(
        "--csv",
        help="Ruta a un CSV con columnas arrival,size,service (en lugar de la entrada estándar)"
    )

    parser.add_argument(
        "-n", "--processes",
        type=int,
        default=SimulationConfig.num_processes,
        help="Cantidad de procesos a leer de la entrada estándar (por defecto: 50)"
    )

    parser.add_argument(
        "--memory-size",
        type=int,
        default=SimulationConfig.memory_size,
        help="Tamaño de la memoria (por defecto: 100)"
    )

    parser.add_argument(
        "--total-time",
        type=int,
        default=SimulationConfig.total_time,
        help="Cantidad de ticks a simular (por defecto: 100)"
    )

    parser.add_argument(
        "--log-level",
        choices=["INFO", "DEBUG"],
        default="INFO",
        help="Nivel de log: INFO (básico) o DEBUG (detallado)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Valida las invariantes de memoria en cada tick"
    )

    return parser


def print_instructions(command):
    """Imprime el modo de uso abreviado."""
    print(f"Usage: {command} fit-type")
    print("  where fit-type is")
    print("     f   for first fit")
    print("     n   for next fit")
    print("     b   for best fit")
    print("     w   for worst fit")


def print_snapshot(snapshot):
    print(format_snapshot(snapshot))
    sys.stdout.flush()


def main(argv=None):
    """
    Punto de entrada principal de la aplicación CLI.

    Un algoritmo faltante o inválido imprime el modo de uso y termina con
    código 0.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.memory_size <= 0:
        parser.error(f"--memory-size debe ser positivo: {args.memory_size}")

    algorithm = Algorithm.from_selector(args.fit_type)
    if algorithm is None:
        print_instructions(parser.prog)
        return 0

    try:
        if args.csv:
            processes = read_processes_csv(args.csv)
        else:
            processes = read_workload(sys.stdin, args.processes)
        print("Finished reading")
        sys.stdout.flush()

        config = SimulationConfig(
            memory_size=args.memory_size,
            total_time=args.total_time,
            num_processes=len(processes),
            algorithm=algorithm,
        )
        simulator = MemorySimulator(
            config,
            reporter=print_snapshot,
            modo_depuracion=args.debug,
            nivel_log=args.log_level,
        )
        results = simulator.ejecutar_simulacion(processes)

        print(format_summary(results))
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
