from .store import DocStore, build_match_query

__all__ = [
    'DocStore',
    'build_match_query'
]
