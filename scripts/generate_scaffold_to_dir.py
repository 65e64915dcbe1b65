"""Generate a backend scaffold without the API or database and write it to a directory.

Example:
    python scripts/generate_scaffold_to_dir.py go --database postgres --jwt --swagger --out test_output/go-api
"""
import argparse
from pathlib import Path
from apiforge.core.catalog import (
    GENERATED_FEATURE_IDS,
    backend_ids,
    default_connection_string,
    default_database,
    validate_combination,
)
from apiforge.core.logging import configure_logging
from apiforge.export.packager import archive_name, build_archive, write_files
from apiforge.generators.registry import GeneratorRegistry
from apiforge.generators.types import GeneratorOptions

configure_logging()

parser = argparse.ArgumentParser(description="Generate a backend scaffold to a directory")
parser.add_argument("backend", choices=backend_ids())
parser.add_argument("--version", default="")
parser.add_argument("--database", default=None)
parser.add_argument("--connection-string", default=None)
for flag in GENERATED_FEATURE_IDS:
    parser.add_argument(f"--{flag}", action="store_true")
parser.add_argument("--out", default=None)
parser.add_argument("--zip", action="store_true", help="also write a zip archive next to the output directory")
args = parser.parse_args()

database_type = args.database or default_database(args.backend)
validate_combination(args.backend, database_type)
entry = GeneratorRegistry.default().get(args.backend)

options = GeneratorOptions.build(
    version=entry.normalize_version(args.version),
    database_type=database_type,
    connection_string=args.connection_string or default_connection_string(database_type),
    features={flag: getattr(args, flag) for flag in GENERATED_FEATURE_IDS},
)
files = entry.generate(options)

out_dir = Path(args.out) if args.out else Path(__file__).parent.parent / "test_output" / f"{args.backend}-api"
write_files(files, out_dir)

print("=" * 60)
print(f"{entry.language.upper()} SCAFFOLD ({database_type})")
print("=" * 60)
for path in files:
    print(f"  {path}")
print(f"\n{len(files)} files written to {out_dir.absolute()}")

if args.zip:
    zip_path = out_dir.parent / archive_name(out_dir.name)
    zip_path.write_bytes(build_archive(files))
    print(f"Archive: {zip_path.absolute()}")
