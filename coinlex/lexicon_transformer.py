"""
Lexicon Transformer: Lark tree transformer for coinlex lexicon files.

Converts Lark parse trees into the typed statements of coinlex.lexicon_ast.
"""

from typing import Optional

from lark import Transformer, v_args

from coinlex import lexicon_ast as ast
from coinlex.errors import ConfigurationError

LIST_NAMES = {"coins", "languages"}


def _unquote(token) -> str:
    return str(token)[1:-1]


def _check_list_name(name) -> str:
    list_name = str(name)
    if list_name not in LIST_NAMES:
        raise ConfigurationError(
            f"Unknown list '{list_name}', expected one of {sorted(LIST_NAMES)}"
        )
    return list_name


@v_args(inline=True)
class LexiconTransformer(Transformer):
    """Transformer producing lexicon_ast.Root from a lexicon parse tree."""

    def __init__(self, lexicon_file_path: Optional[str] = None):
        super().__init__()
        self.lexicon_file_path = lexicon_file_path

    def root(self, version, *statements):
        return ast.Root(
            version=version,
            statements=tuple(statements),
            lexicon_file_path=self.lexicon_file_path,
        )

    def version_stmt(self, version_token):
        return ast.Version(value=str(version_token))

    def import_stmt(self, path, alias):
        return ast.Import(path=_unquote(path), alias=_check_list_name(alias))

    def list_stmt(self, name, items=None):
        return ast.ListDef(name=_check_list_name(name), items=tuple(items or ()))

    def string_list(self, *tokens):
        return [_unquote(token) for token in tokens]

    def delimiter_stmt(self, left, right):
        left_value, right_value = _unquote(left), _unquote(right)
        if not left_value and not right_value:
            raise ConfigurationError("Delimiter pair must not be empty on both sides")
        return ast.DelimiterDef(left=left_value, right=right_value)
