"""Interactive entry point: build a disk, load the sample CSV and answer queries."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from megatron.block import group_sectors
from megatron.csvload import load_csv_and_save
from megatron.disk import Disk
from megatron.filtering import RelationError
from megatron.query import QueryError, process_query, select_relation

SECTORS_PER_BLOCK = 4


def _ask(prompt: str, stream) -> str:
    print(prompt, end="", flush=True)
    line = stream.readline()
    if not line:
        raise EOFError("unexpected end of input")
    return line.rstrip("\r\n")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="megatron", description="MEGATRON 3000")
    parser.add_argument("--root", default=".", help="working directory for all files")
    parser.add_argument(
        "--csv", default="data/titanic.csv", help="CSV file to store, relative to the root"
    )
    return parser


def _fill_disk(disk: Disk, csv_path: Path, csv_name: str, root: Path) -> None:
    try:
        with csv_path.open("r", encoding="utf-8", newline="") as handle:
            records = handle.read().split("\n")
    except OSError:
        print(f"❌ No se pudo abrir el archivo {csv_name}", file=sys.stderr)
        return

    if records and records[-1] == "":
        records.pop()
    print(f"📥 Escribiendo registros de {csv_name} al disco...")
    for count, record in enumerate(records[1:], start=1):
        if disk.write_record(record):
            print(f"✅ Registro #{count} escrito correctamente")
        else:
            print(f"❌ Registro #{count} no se pudo escribir (sin espacio?)", file=sys.stderr)

    for block in group_sectors(disk.all_sectors(), SECTORS_PER_BLOCK, csv_name):
        block.write_header(root / "blocks")
        block.write_content(root / "blocks")


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    root = Path(args.root)
    stream = sys.stdin

    print("MEGATRON 3000\n>> ", end="")
    try:
        plates = int(_ask("Ingrese número de platos: ", stream))
        tracks = int(_ask("Ingrese número de pistas por superficie: ", stream))
        sectors = int(_ask("Ingrese número de sectores por pista: ", stream))
        sector_size = int(_ask("Ingrese capacidad por sector (bytes): ", stream))
    except (ValueError, EOFError) as error:
        print(f"❌ Entrada inválida: {error}", file=sys.stderr)
        return 1

    if plates <= 0 or tracks <= 0 or sectors <= 0:
        print("❌ Todos los valores deben ser mayores que cero.", file=sys.stderr)
        return 1

    try:
        disk_path = _ask("Ingrese la ruta base del disco (ej. 'output/disk'): ", stream)
    except EOFError as error:
        print(f"❌ Entrada inválida: {error}", file=sys.stderr)
        return 1

    csv_path = root / args.csv
    csv_name = csv_path.name
    disk = Disk(plates, tracks, sectors, sector_size, root / disk_path, csv_name)
    _fill_disk(disk, csv_path, csv_name, root)

    try:
        disk.generate_structure_report(root / "output" / "disk_report.txt")
        print("Disk report generated.")
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)

    try:
        load_csv_and_save(csv_path, root / "output", root / "schema" / "schema.txt")
    except OSError:
        print(f"Could not open file: {csv_path}", file=sys.stderr)

    try:
        select_relation(f"{csv_path.stem}_adults", root)
    except RelationError as error:
        print(f"[ERROR] {error}", file=sys.stderr)

    for raw in stream:
        command = raw.rstrip("\r\n")
        if command == "Quit":
            break
        if command.startswith("&") and command.endswith("#"):
            try:
                process_query(command, root)
            except QueryError as error:
                print(error)
        else:
            print("Invalid command format. Use & ... #")
        print(">> ", end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())