"""
Turns the upstream HTML fragment into departments and tests.

Every <h3> starts a department. The table right after it holds one test per
body row, read by fixed column position:

    1 course | 2 name | 3 type | 4 students | 5 date
"""
from typing import List, Optional

import structlog
from lxml import etree, html

from .models import Department, Test

logger = structlog.get_logger(__name__)

COLUMNS = ('course', 'name', 'type', 'students', 'date')


def parse_students(text: str) -> Optional[int]:
    """Parse the students cell, None when it is not a whole number."""
    try:
        return int(text.strip())
    except ValueError:
        return None


def _next_element(el):
    """Next sibling that is an element, skipping comments and PIs."""
    sibling = el.getnext()
    while sibling is not None and not isinstance(sibling.tag, str):
        sibling = sibling.getnext()
    return sibling


def _cell_text(cells, index: int) -> str:
    # positions count every child element, only td cells carry text
    if index < len(cells) and cells[index].tag == 'td':
        return cells[index].text_content().strip()
    return ''


def _table_rows(table) -> list:
    rows = table.xpath('./tbody/tr')
    if rows:
        return rows
    # libxml2 does not insert an implied tbody
    return [tr for tr in table.xpath('./tr') if tr.xpath('./td')]


def parse_row(row) -> Test:
    cells = [child for child in row if isinstance(child.tag, str)]
    values = {column: _cell_text(cells, i) for i, column in enumerate(COLUMNS)}

    students = parse_students(values['students'])
    if students is None:
        logger.warning("students_not_numeric",
                       course=values['course'],
                       text=values['students'])

    return Test(
        course=values['course'],
        name=values['name'],
        type=values['type'],
        students=students,
        date=values['date'],
    )


def parse_departments(fragment: str) -> List[Department]:
    if not fragment or not fragment.strip():
        return []

    try:
        root = html.fragment_fromstring(fragment, create_parent='div')
    except etree.ParserError as e:
        logger.warning("html_parse_failed", error=str(e))
        return []

    departments = []
    for heading in root.iter('h3'):
        tests = []
        table = _next_element(heading)
        if table is not None and table.tag == 'table':
            tests = [parse_row(row) for row in _table_rows(table)]

        departments.append(Department(
            heading=heading.text_content().strip(),
            tests=tests,
        ))

    return departments
