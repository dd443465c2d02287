"""procedure_xml/parser.py — parsowanie XML procedury do modelu procedure_model."""

from __future__ import annotations

import re
from pathlib import Path

import requests
from bs4 import BeautifulSoup, Tag

from procedure_model import MalformedDocument, NameGroup, Procedure, Section, Step, Task

# Tagi nie-strukturalne dopuszczone jako dzieci danego elementu
_TEXT_CHILDREN: dict[str, set[str]] = {
    "procedure": {"title"},
    "section":   {"title", "precis"},
    "step":      {"title"},
    "name":      set(),
}

_TRUE_VALUES  = {"true", "yes", "1"}
_FALSE_VALUES = {"false", "no", "0"}

_WS_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Zamienia \\n, \\t i ciągi spacji na pojedynczą spację; obcina brzegi."""
    return _WS_RE.sub(" ", text).strip()


def _child_tags(el: Tag) -> list[Tag]:
    return [c for c in el.children if isinstance(c, Tag)]


def _text_of(el: Tag | None) -> str:
    return normalize_text(el.get_text(" ")) if el is not None else ""


def _structural(el: Tag, child_name: str, path: str) -> list[tuple[Tag, str]]:
    """
    Zwraca dzieci strukturalne (tag `child_name`) razem z ich ścieżkami.

    Inne tagi niż `child_name` i dopuszczone tagi tekstowe → MalformedDocument.
    """
    allowed = _TEXT_CHILDREN[el.name]
    found: list[tuple[Tag, str]] = []
    for child in _child_tags(el):
        if child.name == child_name:
            found.append((child, f"{path}/{child_name}[{len(found)}]"))
        elif child.name not in allowed:
            raise MalformedDocument(
                f"Nieoczekiwany element <{child.name}> wewnątrz <{el.name}>"
                f" (oczekiwano <{child_name}>)",
                path,
            )
    return found


def _title(el: Tag) -> str:
    """Tytuł z atrybutu title lub z elementu-dziecka <title> (jak w DTD procedur)."""
    attr = el.get("title")
    if attr:
        return normalize_text(str(attr))
    title = next((c for c in _child_tags(el) if c.name == "title"), None)
    return _text_of(title)


def _parse_done(el: Tag, path: str) -> bool:
    raw = el.get("done")
    if raw is None:
        return False
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise MalformedDocument(f"Nieprawidłowa wartość atrybutu done: '{raw}'", path)


# ---------------------------------------------------------------------------
# Budowa modelu
# ---------------------------------------------------------------------------

def _build_name(el: Tag, path: str) -> NameGroup:
    who = el.get("who")
    # identyfikator uczestnika porównywany dosłownie, bez normalizacji
    if who is None or not str(who).strip():
        raise MalformedDocument("Grupa <name> bez wymaganego atrybutu 'who'", path)
    tasks = [
        Task(text=_text_of(t), done=_parse_done(t, p))
        for t, p in _structural(el, "task", path)
    ]
    return NameGroup(who=str(who), tasks=tasks)


def _build_step(el: Tag, path: str) -> Step:
    return Step(
        num=str(el.get("num", "")),
        title=_title(el),
        names=[_build_name(n, p) for n, p in _structural(el, "name", path)],
    )


def _build_section(el: Tag, path: str) -> Section:
    steps = [_build_step(s, p) for s, p in _structural(el, "step", path)]
    # <precis>, jeśli jest, stoi w DTD jako pierwsze dziecko sekcji
    precis_tags = [c for c in _child_tags(el) if c.name == "precis"]
    if len(precis_tags) > 1:
        raise MalformedDocument("Sekcja może mieć co najwyżej jeden <precis>", path)
    precis = _text_of(precis_tags[0]) if precis_tags else None
    return Section(
        num=str(el.get("num", "")),
        title=_title(el),
        precis=precis or None,
        steps=steps,
    )


def parse_procedure(markup: str) -> Procedure:
    """
    Parsuje tekst XML procedury do obiektu Procedure.

    Raises:
        MalformedDocument gdy brak korzenia <procedure>, zagnieżdżenie jest
        niezgodne z procedure > section > step > name > task, brakuje
        atrybutu who lub atrybut done ma nieznaną wartość.
    """
    soup = BeautifulSoup(markup, "html.parser")
    roots = _child_tags(soup)
    if len(roots) != 1 or roots[0].name != "procedure":
        names = ", ".join(f"<{r.name}>" for r in roots) or "brak"
        raise MalformedDocument(f"Oczekiwano pojedynczego korzenia <procedure>, znaleziono: {names}", "/")
    root = roots[0]
    return Procedure(
        title=_title(root),
        sections=[_build_section(s, p) for s, p in _structural(root, "section", "/procedure")],
    )


def parse_procedure_file(path: str | Path) -> Procedure:
    """Wczytuje i parsuje plik XML procedury."""
    return parse_procedure(Path(path).read_text(encoding="utf-8"))


def parse_procedure_url(url: str) -> Procedure:
    """Pobiera dokument procedury z podanego URL i parsuje go."""
    resp = requests.get(url, timeout=30)
    resp.raise_for_status()
    resp.encoding = resp.encoding or resp.apparent_encoding or "utf-8"
    return parse_procedure(resp.text)
