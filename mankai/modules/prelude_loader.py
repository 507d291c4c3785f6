from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterator, Protocol

from mankai.config import get_prelude_roots

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def prelude_files() -> Iterator[Path]:
    """Every *.mk file under the prelude roots, roots in order, files sorted by name."""
    for root in get_prelude_roots():
        if not root.is_dir():
            logger.warning("prelude directory %s does not exist, skipping", root)
            continue
        yield from sorted(root.glob('*.mk'))


def load_file(itp: _HasEvalPrelude, path: Path) -> None:
    logger.info("loading prelude %s", path)
    itp.eval_prelude(path.read_text(encoding='utf-8'))


def load_prelude(itp: _HasEvalPrelude) -> None:
    for path in prelude_files():
        load_file(itp, path)
