from .client import DbClient, SqlAlchemyDbClient
from .models import MatchedRow, ReplaceResult, SearchSpec
from .session import DbSession

__all__ = [
    "DbClient",
    "DbSession",
    "SqlAlchemyDbClient",
    "SearchSpec",
    "MatchedRow",
    "ReplaceResult",
]
