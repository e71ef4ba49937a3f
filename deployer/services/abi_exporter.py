"""
Writing contract ABIs to disk
"""

import json
import logging
from pathlib import Path
from typing import List, Mapping

from ..constants import ABI_DIR, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def export_abis(abis: Mapping[str, list], out_dir: Path = ABI_DIR) -> List[Path]:
    """Write each ABI as ``<out_dir>/<name>.json``, replacing existing files"""
    written = []
    if not abis:
        logger.info("No ABIs to export")
        return written

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    for name, abi in abis.items():
        abi_path = out_dir / f"{name}.json"
        abi_path.write_text(json.dumps(abi, indent=2), encoding='utf-8')
        print(f"📁 Exported {name} ABI into {abi_path}")
        written.append(abi_path)

    return written
