"""Script to dump the apiforge HTTP API description to openapi.yaml for inspection."""
import argparse
from pathlib import Path
import yaml
from apiforge.main import app

parser = argparse.ArgumentParser(description=__doc__)
parser.add_argument("--out", default=str(Path(__file__).parent.parent / "test_output" / "openapi.yaml"))
args = parser.parse_args()

out_path = Path(args.out)
out_path.parent.mkdir(parents=True, exist_ok=True)
out_path.write_text(yaml.safe_dump(app.openapi(), sort_keys=False), encoding="utf-8")

print("=" * 60)
print("OPENAPI.YAML GENERATION")
print("=" * 60)
print(f"Paths: {len(app.openapi()['paths'])}")
print(f"Written to: {out_path.absolute()}")
