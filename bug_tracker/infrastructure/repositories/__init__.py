from .in_memory_bug_repository import InMemoryBugRepository
from .mongo_bug_repository import MongoBugRepository

__all__ = ["InMemoryBugRepository", "MongoBugRepository"]
