__version__ = "0.5"

from .config import DbConfig
from .db.client import DbClient, SqlAlchemyDbClient
from .db.models import MatchedRow, ReplaceResult, SearchSpec
from .errors import DatabaseError, MjsonError, PartialReplaceError, RefusedError
from .escape import encode_fragment
from .replace import replace
from .search import find_rows, render_excerpt

__all__ = [
    "__version__",
    "DbConfig",
    "DbClient",
    "SqlAlchemyDbClient",
    "SearchSpec",
    "MatchedRow",
    "ReplaceResult",
    "MjsonError",
    "RefusedError",
    "DatabaseError",
    "PartialReplaceError",
    "encode_fragment",
    "find_rows",
    "render_excerpt",
    "replace",
]
