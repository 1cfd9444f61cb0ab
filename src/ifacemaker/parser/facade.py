from typing import List, Tuple

from ifacemaker.graph import EmbeddingGraph
from ifacemaker.logging_config import logger
from ifacemaker.schemas import DeclaredType
from .declarations import scan_declared_types
from .embedding import scan_embedding_graph


def scan_file(src: bytes, file_path: str) -> Tuple[List[DeclaredType], EmbeddingGraph]:
    """
    First-pass scan of a single Go source file.

    Returns the declared types and the struct embedding graph of the file.

    Raises:
        ParserError: If the source is not valid Go.
    """
    logger.debug(f"Scanning declarations in {file_path}")
    return scan_declared_types(src, file_path), scan_embedding_graph(src, file_path)
