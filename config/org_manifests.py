"""
Partner organization manifests.

Volunteers who sign up through a partner organization carry the
organization's key in ``User.volunteer_partner_org``. The manifest for that
key controls partner-specific behavior, such as limiting the volunteer to
math coaching.

Manifests are file-backed so partners can be onboarded without a migration.
The bundled ``org_manifests.yaml`` is used unless ``ORG_MANIFESTS_PATH``
points to another JSON or YAML file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping

import yaml

DEFAULT_MANIFESTS_PATH = Path(__file__).with_name("org_manifests.yaml")


class OrgManifestConfigError(ValueError):
    """Raised when the manifest file is missing or malformed."""


@dataclass(frozen=True)
class OrgManifest:
    key: str
    name: str
    math_coaching_only: bool = False


def _load_file(path: Path) -> MutableMapping[str, object]:
    if not path.exists():
        raise OrgManifestConfigError(f"Org manifest file {path} does not exist.")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OrgManifestConfigError(f"Unable to read org manifest file {path}: {exc}") from exc

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise OrgManifestConfigError(f"Org manifest file {path} is not valid JSON/YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, MutableMapping):
        raise OrgManifestConfigError("Org manifests must be a JSON/YAML object keyed by organization.")
    return data


def _coerce_manifest(key: str, raw: object) -> OrgManifest:
    if not isinstance(raw, Mapping):
        raise OrgManifestConfigError(f"Manifest for {key!r} must be an object.")
    name = str(raw.get("name") or key).strip()
    math_only = raw.get("math_coaching_only", raw.get("mathCoachingOnly", False))
    if not isinstance(math_only, bool):
        raise OrgManifestConfigError(f"Manifest for {key!r}: math_coaching_only must be a boolean.")
    return OrgManifest(key=key, name=name, math_coaching_only=math_only)


def load_org_manifests(path: str | Path | None = None) -> dict[str, OrgManifest]:
    """
    Load manifests keyed by partner organization.

    ``path`` defaults to the bundled file.
    """
    manifest_path = Path(path) if path else DEFAULT_MANIFESTS_PATH
    raw = _load_file(manifest_path)
    return {str(key): _coerce_manifest(str(key), value) for key, value in raw.items()}


__all__ = [
    "DEFAULT_MANIFESTS_PATH",
    "OrgManifest",
    "OrgManifestConfigError",
    "load_org_manifests",
]
