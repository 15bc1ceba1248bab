import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from lark import Lark
from lark.exceptions import VisitError

from coinlex.errors import ConfigurationError
from coinlex.lexicon_ast import DelimiterDef, Import, Lexicon, ListDef, Root
from coinlex.lexicon_transformer import LexiconTransformer
from coinlex.variants import DEFAULT_DELIMITERS, DelimiterPair

# Lexicon file format version. Bump together with lexicon_grammar.lark.
LEXICON_VERSION = "1.0"

GRAMMAR_PATH = Path(__file__).parent / "lexicon_grammar.lark"
DEFAULT_LEXICON_PATH = Path(__file__).parent / "data" / "default.lexicon"

with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    LEXICON_GRAMMAR = f.read()

lexicon_parser = Lark(
    LEXICON_GRAMMAR, start="root", parser="lalr", propagate_positions=True
)

logger = logging.getLogger(__name__)


def parse_string(
    code: str, *, unwrap: bool = True, lexicon_file_path: Optional[str] = None
) -> Root:
    tree = lexicon_parser.parse(code)
    try:
        root = LexiconTransformer(lexicon_file_path=lexicon_file_path).transform(tree)
    except VisitError as ve:
        if unwrap:
            raise ve.orig_exc from ve
        raise

    if root.version.value != LEXICON_VERSION:
        raise ConfigurationError(
            f"Unsupported lexicon version: {root.version.value}. Expected {LEXICON_VERSION}."
        )
    return root


def parse_file(path, *, unwrap: bool = True) -> Root:
    with open(path, "r", encoding="utf-8") as file:
        return parse_string(file.read(), unwrap=unwrap, lexicon_file_path=str(path))


def read_list_file(path: str, lexicon_file_path: Optional[str] = None) -> List[str]:
    """
    Read one entry per line, skipping blank lines and '#' comments.

    Relative paths are resolved against the lexicon file's directory.
    """
    if lexicon_file_path and not os.path.isabs(path):
        path = os.path.join(os.path.dirname(lexicon_file_path), path)

    if not os.path.isfile(path):
        raise ConfigurationError(f"Import file not found: {path}")

    entries = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            entry = line.strip()
            if entry and not entry.startswith("#"):
                entries.append(entry)
    logger.debug("Loaded %s entries from %s", len(entries), path)
    return entries


def load_lexicon(root: Root) -> Lexicon:
    """
    Resolve a parsed lexicon into its lists, reading imported files.

    Statements naming the same list append to it in file order. Without any
    delimiter statement the default delimiter pairs apply.
    """
    lists: Dict[str, List[str]] = {"coins": [], "languages": []}
    delimiters: List[DelimiterPair] = []
    for statement in root.statements:
        if isinstance(statement, ListDef):
            lists[statement.name].extend(statement.items)
        elif isinstance(statement, Import):
            lists[statement.alias].extend(
                read_list_file(statement.path, root.lexicon_file_path)
            )
        elif isinstance(statement, DelimiterDef):
            delimiters.append(DelimiterPair(statement.left, statement.right))

    logger.info(
        "Lexicon loaded: %s coins, %s languages, %s delimiter pairs",
        len(lists["coins"]),
        len(lists["languages"]),
        len(delimiters) or len(DEFAULT_DELIMITERS),
    )
    return Lexicon(
        coins=tuple(lists["coins"]),
        languages=tuple(lists["languages"]),
        delimiters=tuple(delimiters) if delimiters else DEFAULT_DELIMITERS,
    )


def load_file(path=DEFAULT_LEXICON_PATH) -> Lexicon:
    """Parse and resolve a lexicon file (the packaged default if omitted)."""
    return load_lexicon(parse_file(path))
