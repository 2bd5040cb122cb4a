# artcert/registry/seeds.py
"""
Seed certificates written by AssetRegistry.initialize().

Seeds live in a YAML file using the storage field names of a
certificate, under a top-level ``certificates`` list.
"""

from pathlib import Path
from typing import List

import yaml

from ..certificate import Certificate, encode_certificate
from ..errors import SerializationError

DEFAULT_SEEDS_PATH = Path(__file__).parent / "seeds.yaml"


def seeds_from_yaml(yaml_content: str) -> List[Certificate]:
    """Parse seed certificates from a YAML string."""
    try:
        data = yaml.safe_load(yaml_content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Seed file is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Seed file must be a mapping with a 'certificates' list")

    entries = data.get("certificates") or []
    if not isinstance(entries, list):
        raise ValueError("Seed file 'certificates' must be a list")

    seeds = []
    for i, entry in enumerate(entries):
        try:
            cert = Certificate.from_dict(entry)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Seed certificate #{i} is incomplete: {e}") from e
        # Same field checks as the storage codec
        try:
            encode_certificate(cert)
        except SerializationError as e:
            raise ValueError(f"Seed certificate #{i} is invalid: {e}") from e
        seeds.append(cert)
    return seeds


def load_seeds(path: Path | str = None) -> List[Certificate]:
    """Load seed certificates from a YAML file (the bundled seeds by default)."""
    path = Path(path) if path else DEFAULT_SEEDS_PATH
    with open(path, "r") as f:
        return seeds_from_yaml(f.read())
