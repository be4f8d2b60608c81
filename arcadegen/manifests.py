"""
Manifest loading.

A manifest is the game description produced by the generation
collaborator: palette, assets, optional authored levels and dynamic
entities. Manifests arrive as JSON (over the wire) or as JSON/YAML files
in a manifests directory.

Loading is two-step: the raw dict is checked against
schemas/manifest.schema.json with jsonschema, then parsed into the
Manifest model, which enforces the level invariants the schema cannot
express (rectangular layout, spawn not on a wall, ...).

Example manifest (manifests/spooky_dungeon.yaml):
    gameId: spooky-dungeon
    genre: maze
    palette: ["#1A1A2E", "#E94560", "#0F3460"]
    assets:
      - {type: sprite, name: hero, url: /assets/hero.png, frames: 4}
    levels: []
    dynamicEntities:
      - type: bat
        spawnArea: {xMin: 2, xMax: 8, yMin: 2, yMax: 6}
        behavior: {name: wander, speed: 60}
"""
from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
import yaml

from models import Manifest

from arcadegen.generation.genre import resolve_genre
from arcadegen.logging import get_logger

log = get_logger('manifests')


# =============================================================================
# Schema Validation
# =============================================================================

_manifest_schema: Optional[Dict[str, Any]] = None
_SCHEMAS_DIR = Path(__file__).parent / 'schemas'
_MANIFEST_EXTENSIONS = ('.json', '.yaml', '.yml')


def _skip_validation() -> bool:
    """Set ARCADEGEN_SKIP_SCHEMA_VALIDATION=1 to downgrade schema errors to warnings."""
    return os.environ.get('ARCADEGEN_SKIP_SCHEMA_VALIDATION', '').lower() in ('1', 'true', 'yes')


class SchemaValidationError(Exception):
    """Raised when manifest data fails schema validation."""
    pass


def _get_manifest_schema() -> Optional[Dict[str, Any]]:
    """Lazy-load manifest schema."""
    global _manifest_schema
    if _manifest_schema is None:
        schema_path = _SCHEMAS_DIR / 'manifest.schema.json'
        if schema_path.exists():
            with open(schema_path) as f:
                _manifest_schema = json.load(f)
    return _manifest_schema


def validate_manifest_data(data: Dict[str, Any], source_path: Optional[Path] = None) -> None:
    """Validate raw manifest data against the schema.

    Args:
        data: Parsed JSON/YAML data
        source_path: Optional path for error messages

    Raises:
        SchemaValidationError: If validation fails (unless ARCADEGEN_SKIP_SCHEMA_VALIDATION=1)
    """
    schema = _get_manifest_schema()
    if schema is None:
        error_msg = f"Schema file not found: {_SCHEMAS_DIR / 'manifest.schema.json'}"
        if _skip_validation():
            log.warning(error_msg)
            return
        raise SchemaValidationError(error_msg)

    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        path_str = f" in {source_path}" if source_path else ""
        location = '/'.join(str(p) for p in e.absolute_path) or '<root>'
        error_msg = f"Schema validation error{path_str}: {e.message} at {location}"
        if _skip_validation():
            log.warning(error_msg)
        else:
            raise SchemaValidationError(error_msg) from e
    except jsonschema.SchemaError as e:
        error_msg = f"Invalid schema: {e.message}"
        if _skip_validation():
            log.warning(error_msg)
        else:
            raise SchemaValidationError(error_msg) from e


def _load_data_file(path: Path) -> Dict[str, Any]:
    """Load data from a JSON or YAML file, chosen by suffix."""
    if not path.exists():
        raise FileNotFoundError(f"No data file found: {path}")

    with open(path, 'r') as f:
        if path.suffix == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping, got {type(data).__name__}: {path}")
    return data


def parse_manifest(data: Dict[str, Any], source_path: Optional[Path] = None) -> Manifest:
    """Validate and parse manifest data.

    Raises:
        SchemaValidationError: If the data does not match the schema
        pydantic.ValidationError: If the data breaks a model invariant
    """
    validate_manifest_data(data, source_path)
    return Manifest.model_validate(data)


def load_manifest_file(path: Union[str, Path]) -> Manifest:
    """Load a manifest from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a mapping
        SchemaValidationError: If the data does not match the schema
    """
    path = Path(path)
    data = _load_data_file(path)
    if not data:
        raise ValueError(f"Empty manifest file: {path}")
    return parse_manifest(data, path)


# =============================================================================
# Manifest Directory
# =============================================================================

@dataclass
class ManifestInfo:
    """Manifest metadata for selection lists, without parsing levels."""
    slug: str  # Filename without extension, used as identifier
    game_id: str
    genre: str  # Resolved genre value
    level_count: int = 0
    entity_count: int = 0
    file_path: Optional[Path] = None


class ManifestLoader:
    """Lists and loads manifests from a directory.

    Usage:
        loader = ManifestLoader(Path('manifests'))
        for slug in loader.list_manifests():
            print(loader.get_manifest_info(slug))
        manifest = loader.load_manifest('spooky_dungeon')
    """

    def __init__(self, manifests_dir: Union[str, Path]):
        """Initialize the manifest loader.

        Args:
            manifests_dir: Directory containing manifest JSON/YAML files
        """
        self._manifests_dir = Path(manifests_dir)
        self._info_cache: Dict[str, ManifestInfo] = {}

    @property
    def manifests_dir(self) -> Path:
        return self._manifests_dir

    def list_manifests(self) -> List[str]:
        """List available manifest slugs (sorted)."""
        if not self._manifests_dir.exists():
            return []

        slugs = set()  # .json and .yaml of the same slug count once
        for path in self._manifests_dir.iterdir():
            if path.suffix not in _MANIFEST_EXTENSIONS:
                continue
            if path.name.startswith("_") or path.name.startswith("."):
                continue
            slugs.add(path.stem)
        return sorted(slugs)

    def get_manifest_info(self, slug: str) -> Optional[ManifestInfo]:
        """Get manifest metadata without full validation.

        Returns:
            ManifestInfo, or None if the file is missing or unreadable
        """
        if slug in self._info_cache:
            return self._info_cache[slug]

        path = self._find_manifest_file(slug)
        if not path:
            return None

        try:
            data = _load_data_file(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            log.warning("Could not read manifest %s: %s", path, e)
            return None

        game_id = str(data.get('gameId', slug))
        info = ManifestInfo(
            slug=slug,
            game_id=game_id,
            genre=resolve_genre(data.get('genre'), game_id).value,
            level_count=len(data.get('levels') or []),
            entity_count=len(data.get('dynamicEntities') or []),
            file_path=path,
        )
        self._info_cache[slug] = info
        return info

    def load_manifest(self, slug: str) -> Manifest:
        """Load and validate a manifest by slug.

        Raises:
            FileNotFoundError: If no manifest file exists for the slug
            ValueError: If the file is empty or invalid
            SchemaValidationError: If the data does not match the schema
        """
        path = self._find_manifest_file(slug)
        if not path:
            raise FileNotFoundError(f"Manifest not found: {slug}")
        return load_manifest_file(path)

    def _find_manifest_file(self, slug: str) -> Optional[Path]:
        """Find the file for a slug (.json preferred)."""
        for ext in _MANIFEST_EXTENSIONS:
            path = self._manifests_dir / f"{slug}{ext}"
            if path.exists():
                return path
        return None

    def get_all_info(self) -> Dict[str, ManifestInfo]:
        """Get info for all readable manifests (cached)."""
        for slug in self.list_manifests():
            self.get_manifest_info(slug)
        return self._info_cache.copy()
