from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Division(BaseModel):
    """A faculty with its own exam listing upstream."""
    model_config = ConfigDict(frozen=True)

    name: str
    id: int
    slug: str


class Test(BaseModel):
    # not a pytest test class
    __test__ = False

    course: str
    name: str
    type: str
    # None when the upstream cell is not an integer
    students: Optional[int] = None
    date: str


class Department(BaseModel):
    heading: str
    tests: List[Test] = []


class DivisionResult(BaseModel):
    """What gets cached under ``<prefix>:<slug>``."""
    heading: str
    departments: List[Department] = []


class Stats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    min: int
    max: int
    num_tests: int
    num_students: int
    average_students: str
