from __future__ import annotations

import sys
from pathlib import Path

# Make ``import fluxion`` work from a plain checkout without installing.
_START = Path(__file__).resolve().parent
_repo_root = _START
while _repo_root != _repo_root.parent and not (_repo_root / "fluxion" / "__init__.py").exists():
    _repo_root = _repo_root.parent

sys.path.insert(0, str(_repo_root))
