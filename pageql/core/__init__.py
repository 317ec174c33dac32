"""Backend-agnostic page resolution building blocks."""
from __future__ import annotations

from .analyzer import SelectionAnalysis, SelectionAnalyzer
from .builders import ContentQueryBuilder, CountQueryBuilder
from .distinct import DistinctResolver
from .plan import ExecutionHints, PageWindow, QueryPlan
from .predicates import PredicateCompiler, PredicateContext, PredicateResolver
from .request import Argument, Request, Selection
from .result import ResultAssembler, page_count

__all__ = [
    'Argument',
    'ContentQueryBuilder',
    'CountQueryBuilder',
    'DistinctResolver',
    'ExecutionHints',
    'PageWindow',
    'PredicateCompiler',
    'PredicateContext',
    'PredicateResolver',
    'QueryPlan',
    'Request',
    'ResultAssembler',
    'Selection',
    'SelectionAnalysis',
    'SelectionAnalyzer',
    'page_count',
]
