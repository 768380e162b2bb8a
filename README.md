# megatron

A small teaching database engine. It simulates a hard disk made of plates,
surfaces, tracks and sectors, where every sector is a plain text file. It
loads CSV files into `#`-delimited relations with an inferred schema,
filters stored relations, and answers simple `SELECT ... WHERE` queries.

## Install

```
pip install .
```

## Running

```
megatron [--root DIR] [--csv PATH]
```

- `--root` is the working directory for every file the program reads or
  writes (default `.`).
- `--csv` is the CSV file to store, relative to the root (default
  `data/titanic.csv`).

The program asks on standard input for the disk geometry: number of plates,
tracks per surface, sectors per track, sector capacity in bytes, and a base
directory for the disk (for example `output/disk`). Plates, tracks and
sectors must be greater than zero. Then it:

1. writes every data row of the CSV file (the header line is skipped) to
   the first sector with room, trying plate by plate, top surface before
   bottom, track by track; each stored line is tagged with its location,
   e.g. `|Plate 0 - Surface Top - Track 0 - Sector 0`;
2. groups the sectors four at a time into blocks and writes
   `blocks/block_<n>_header.txt` and `blocks/block_<n>_data.txt`;
3. writes a structure report to `output/disk_report.txt`;
4. loads the CSV file into `output/<stem>.txt` and appends its schema line
   to `schema/schema.txt`;
5. prints the relation `<stem>_adults` if it has been stored before.

After that it reads queries, one per line, until `Quit` or end of input:

```
& SELECT * FROM titanic WHERE Age >= 30 | adults #
```

A query must start with `&` and end with `#`. It reads the raw table from
`data/<table>.csv` and takes column types from the table's entry in
`schema/schema.txt`. Without a `WHERE` clause every line is selected;
without `| name` the lines are printed, otherwise they are written to
`output/<name>.txt` and the table's schema is registered under the new
name. Supported operators are `==`, `!=`, `<`, `<=`, `>`, `>=`.

## Disk layout

Sector files live under the base directory as

```
<base>/plate<p>_top/surface000/track<t>/sector<s>.txt
<base>/plate<p>_bottom/surface001/track<t>/sector<s>.txt
```

The first write to a sector puts a metadata header (source file, capacity,
free and used space) in front of its records; the header is refreshed after
every write and counts towards the sector's used space.

## Schema format

`schema/schema.txt` holds one line per relation:

```
titanic#PassengerId#int#Name#string#Fare#float
```

Types are inferred from the first data row: digits only give `int`, digits
with a single dot give `float`, anything else is `string`.

`megatron.schema` also reads and writes a single-relation form,
`name,attr:type,...`, through `parse_schema_file` and `save_schema`.

## Library use

```python
from megatron.disk import Disk
from megatron.block import group_sectors
from megatron.csvload import load_csv_and_save
from megatron.filtering import filter_relation
from megatron.query import process_query, select_relation

disk = Disk(1, 2, 4, 512, "output/disk", "titanic.csv")
disk.write_record("1,0,3,Braund")
disk.generate_structure_report("output/disk_report.txt")
blocks = group_sectors(disk.all_sectors(), 4, "titanic.csv")

load_csv_and_save("data/titanic.csv", "output", "schema/schema.txt")
filter_relation("titanic", "Age", ">=", "30", "titanic_adults", ".")
select_relation("titanic_adults", ".")
process_query("& SELECT * FROM titanic WHERE Sex == male | men #", ".")
```

`filter_relation` and `select_relation` raise
`megatron.filtering.RelationError` when a relation, its schema or an
attribute is missing; `process_query` raises `megatron.query.QueryError`
for a malformed query or an unreadable table.

## Limits

- The disk's bookkeeping (used space per sector) lives in memory only.
  A new run does not read back sector files left by an earlier one; it
  appends to them.
- Filtering (`filter_relation`) is available from Python only; the
  interactive prompt accepts `SELECT` queries alone.
- Queries support a single `WHERE` condition and always select every
  column.

## Tests

```
pip install .[test]
pytest
```