"""Generate JSON schemas for the omreport records and save to schemas/ directory."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from omreport import models
from omreport.config import OMReportConfig

OUTPUT_MODELS = [
    models.AboutOutput,
    models.ChassisOutput,
    models.ChassisBatteriesOutput,
    models.ChassisFansOutput,
    models.ChassisProcessorsOutput,
    models.ChassisMemoryOutput,
    models.ChassisTempsOutput,
    models.ChassisVoltsOutput,
    models.ChassisPowerMonitoringOutput,
    models.ChassisPowerSuppliesOutput,
    models.StorageControllerOutput,
    models.StorageEnclosureOutput,
    models.StorageVDiskOutput,
    models.StoragePDiskOutput,
]


def _write(schema: dict, path: Path) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {path}")


def generate_schemas(schemas_dir: Path = None):
    """Generate JSON schemas for the config and every report record."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    _write(OMReportConfig.model_json_schema(), schemas_dir / "config.schema.json")

    # Serialization mode: records are produced by the library, not parsed from JSON.
    for model in OUTPUT_MODELS:
        _write(
            model.model_json_schema(mode="serialization"),
            schemas_dir / f"{model.__name__}.schema.json",
        )

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
