"""
Wspólne fikstury: przykładowa procedura.

Identyfikatory (pre-order):
  n0 procedure
    n1 section
      n2 step 1
        n3 name joe     → n4, n5
        n6 name fred    → n7, n8
      n9 step 2
        n10 name scarlet → n11
"""

from __future__ import annotations

from typing import Callable

import pytest

from procedure_model import NameGroup, Procedure, Section, Step, Task
from sequencer import IdentifierTable, ProcedureSession, index

SAMPLE_XML = (
    "<procedure>"
    "<section>"
    "<step>"
    '<name who="joe"><task>Blah</task><task>Fee fi fo fum</task></name>'
    '<name who="fred"><task>Bling</task><task>MoreBling</task></name>'
    "</step>"
    '<step><name who="scarlet"><task>Jumping up and down</task></name></step>'
    "</section>"
    "</procedure>"
)


def _make_sample() -> Procedure:
    return Procedure(
        sections=[
            Section(
                steps=[
                    Step(
                        num="1",
                        names=[
                            NameGroup(who="joe", tasks=[Task("Blah"), Task("Fee fi fo fum")]),
                            NameGroup(who="fred", tasks=[Task("Bling"), Task("MoreBling")]),
                        ],
                    ),
                    Step(
                        num="2",
                        names=[NameGroup(who="scarlet", tasks=[Task("Jumping up and down")])],
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def make_procedure() -> Callable[[], Procedure]:
    """Fabryka świeżych kopii przykładowej procedury (gdy test potrzebuje kilku)."""
    return _make_sample


@pytest.fixture
def sample() -> Procedure:
    return _make_sample()


@pytest.fixture
def table(sample: Procedure) -> IdentifierTable:
    return index(sample)


@pytest.fixture
def session(sample: Procedure) -> ProcedureSession:
    return ProcedureSession(sample)


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML
