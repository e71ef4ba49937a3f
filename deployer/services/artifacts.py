"""
Loading compiled contract artifacts

Both Hardhat (``bytecode`` as a hex string) and Foundry (``bytecode.object``)
JSON layouts are accepted.
"""

import json
from pathlib import Path
from typing import Iterable, List

from ..exceptions import ArtifactError
from ..models import ContractArtifact


def _find_artifact_file(name: str, artifacts_dir: Path) -> Path:
    candidates = [
        artifacts_dir / f"{name}.json",
        artifacts_dir / f"{name}.sol" / f"{name}.json",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    raise ArtifactError(f"Artifact for {name} not found in {artifacts_dir}")


def load_artifact(name: str, artifacts_dir: Path) -> ContractArtifact:
    """Read the ABI and deployment bytecode of contract ``name``"""
    path = _find_artifact_file(name, Path(artifacts_dir))
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Invalid artifact {path}: {e}") from e

    abi = data.get('abi')
    bytecode = data.get('bytecode')
    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object')

    if abi is None or not bytecode:
        raise ArtifactError(f"Artifact {path} has no abi or bytecode")

    if not bytecode.startswith('0x'):
        bytecode = '0x' + bytecode

    return ContractArtifact(name=name, abi=abi, bytecode=bytecode)


def load_artifacts(names: Iterable[str], artifacts_dir: Path) -> List[ContractArtifact]:
    return [load_artifact(name, artifacts_dir) for name in names]
