import math

import pytest

from pageql import PageWindow, ReservedNames, Request
from pageql.core.analyzer import SelectionAnalyzer
from pageql.core.result import ResultAssembler, page_count


@pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 100])
@pytest.mark.parametrize("size", [1, 10, 100])
def test_page_count_is_ceiling(total, size):
    assert page_count(total, PageWindow(1, size)) == math.ceil(total / size)


def test_page_count_boundaries():
    assert page_count(0, PageWindow(1, 10)) == 0
    assert page_count(10, PageWindow(1, 10)) == 1
    assert page_count(11, PageWindow(1, 10)) == 2


def test_page_count_without_window():
    assert page_count(0, PageWindow()) == 0
    assert page_count(1, PageWindow()) == 1
    assert page_count(5000, PageWindow()) == 1


def _analysis(selections, page=None):
    args = {'page': page} if page else None
    return SelectionAnalyzer(ReservedNames()).analyze(Request.of('users', args, selections))


def test_assemble_orders_keys_and_omits_unrequested():
    assembler = ResultAssembler(ReservedNames())
    result = assembler.assemble(_analysis(['pages', 'records', 'total'], {'start': 1, 'limit': 2}), ['a', 'b'], 3)
    assert list(result) == ['records', 'total', 'pages']
    assert result == {'records': ['a', 'b'], 'total': 3, 'pages': 2}


def test_assemble_total_only():
    result = ResultAssembler(ReservedNames()).assemble(_analysis(['total']), None, 4)
    assert result == {'total': 4}


def test_assemble_pages_only():
    result = ResultAssembler(ReservedNames()).assemble(_analysis(['pages'], {'start': 1, 'limit': 3}), None, 7)
    assert result == {'pages': 3}


def test_assemble_uses_configured_keys():
    names = ReservedNames(records='select', total='count')
    analysis = SelectionAnalyzer(names).analyze(Request.of('users', None, ['select', 'count']))
    assert ResultAssembler(names).assemble(analysis, [], 0) == {'select': [], 'count': 0}
