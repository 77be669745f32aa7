"""
Divisions (svið) with their upstream id and the slug used by the service.
"""
from typing import Optional, Tuple

from .models import Division

SCHOOLS: Tuple[Division, ...] = (
    Division(name='Félagsvísindasvið', id=1, slug='felagsvisindasvid'),
    Division(name='Heilbrigðisvísindasvið', id=2, slug='heilbrigdisvisindasvid'),
    Division(name='Hugvísindasvið', id=3, slug='hugvisindasvid'),
    Division(name='Menntavísindasvið', id=4, slug='menntavisindasvid'),
    Division(name='Verkfræði- og náttúruvísindasvið', id=5, slug='verkfraedi-og-natturuvisindasvid'),
)


def all_schools() -> Tuple[Division, ...]:
    return SCHOOLS


def find_by_slug(slug: str, schools: Tuple[Division, ...] = SCHOOLS) -> Optional[Division]:
    for school in schools:
        if school.slug == slug:
            return school
    return None
